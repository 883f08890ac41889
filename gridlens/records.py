# gridlens/records.py

from dataclasses import dataclass
from typing import Optional

# ==========================================
# 1. TABLE RECORDS
# ==========================================

@dataclass(frozen=True)
class Race:
    race_id: str
    year: int
    round: int
    circuit_id: str
    name: str
    date: Optional[str] = None

    @property
    def short_name(self) -> str:
        return self.name.replace(" Grand Prix", "")


@dataclass(frozen=True)
class Result:
    race_id: str
    driver_id: str
    grid: int
    position_order: int
    points: float
    status_id: str
    fastest_lap_rank: Optional[int] = None
    fastest_lap_speed: Optional[float] = None
    fastest_lap_time: Optional[str] = None

    @property
    def pit_lane_start(self) -> bool:
        return self.grid == 0


@dataclass(frozen=True)
class Driver:
    driver_id: str
    forename: str
    surname: str
    code: str

    @property
    def full_name(self) -> str:
        return f"{self.forename} {self.surname}"


@dataclass(frozen=True)
class Circuit:
    circuit_id: str
    name: str
    location: str
    country: str
    lat: float
    lng: float


@dataclass(frozen=True)
class DriverStanding:
    race_id: str
    driver_id: str
    position: int
    points: float
    wins: int


@dataclass(frozen=True)
class PitStop:
    race_id: str
    driver_id: str
    stop: int
    lap: int
    duration: Optional[str] = None
    milliseconds: Optional[int] = None


@dataclass(frozen=True)
class Status:
    status_id: str
    label: str


# ==========================================
# 2. HELPERS
# ==========================================

def id_sort_key(record_id: str):
    """Numeric ids ("9" < "10") sort as numbers, anything else after them as text."""
    if record_id.isdigit():
        return (0, int(record_id), record_id)
    return (1, 0, record_id)

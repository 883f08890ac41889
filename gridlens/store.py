# gridlens/store.py

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from gridlens.records import Circuit, Driver, DriverStanding, PitStop, Race, Result, Status


@dataclass(frozen=True)
class RecordStore:
    """
    Owned, read-only snapshot of every table plus the id lookups built from it.
    Components receive the store by reference and never mutate it.
    """
    races: Tuple[Race, ...]
    results: Tuple[Result, ...]
    drivers: Tuple[Driver, ...]
    circuits: Tuple[Circuit, ...]
    driver_standings: Tuple[DriverStanding, ...]
    pit_stops: Tuple[PitStop, ...]
    statuses: Tuple[Status, ...]

    races_by_id: Mapping[str, Race] = field(init=False, repr=False, compare=False)
    drivers_by_id: Mapping[str, Driver] = field(init=False, repr=False, compare=False)
    circuits_by_id: Mapping[str, Circuit] = field(init=False, repr=False, compare=False)
    status_labels: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # frozen dataclass: indices are attached once through object.__setattr__
        object.__setattr__(self, "races_by_id", MappingProxyType({r.race_id: r for r in self.races}))
        object.__setattr__(self, "drivers_by_id", MappingProxyType({d.driver_id: d for d in self.drivers}))
        object.__setattr__(self, "circuits_by_id", MappingProxyType({c.circuit_id: c for c in self.circuits}))
        object.__setattr__(self, "status_labels", MappingProxyType({s.status_id: s.label for s in self.statuses}))

    @classmethod
    def build(cls,
              races: Iterable[Race] = (),
              results: Iterable[Result] = (),
              drivers: Iterable[Driver] = (),
              circuits: Iterable[Circuit] = (),
              driver_standings: Iterable[DriverStanding] = (),
              pit_stops: Iterable[PitStop] = (),
              statuses: Iterable[Status] = ()) -> "RecordStore":
        return cls(
            races=tuple(races),
            results=tuple(results),
            drivers=tuple(drivers),
            circuits=tuple(circuits),
            driver_standings=tuple(driver_standings),
            pit_stops=tuple(pit_stops),
            statuses=tuple(statuses),
        )

    # --- LOOKUPS ---
    def race(self, race_id: str) -> Optional[Race]:
        return self.races_by_id.get(race_id)

    def driver(self, driver_id: str) -> Optional[Driver]:
        return self.drivers_by_id.get(driver_id)

    def circuit(self, circuit_id: str) -> Optional[Circuit]:
        return self.circuits_by_id.get(circuit_id)

    def status_label(self, status_id: str) -> Optional[str]:
        return self.status_labels.get(status_id)

    def years(self):
        return sorted({r.year for r in self.races})

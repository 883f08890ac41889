# gridlens/standings.py

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from gridlens.config import ALL
from gridlens.filters import last_race
from gridlens.records import Race

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StandingRow:
    position: int
    driver_id: str
    driver_name: str
    code: str
    points: float
    wins: int
    is_highlighted: bool


@dataclass(frozen=True)
class StandingsTable:
    race: Optional[Race]
    rows: Tuple[StandingRow, ...]

    @property
    def is_empty(self) -> bool:
        return not self.rows


def resolve_target_race(races: Iterable[Race], circuit_id: str = ALL) -> Optional[Race]:
    """
    Race whose standings snapshot is shown.
    With a circuit picked: the last race held there that season.
    Otherwise: the season finale.
    """
    return last_race(races, circuit_id)


def driver_standings(store, races: Iterable[Race], selection) -> StandingsTable:
    target = resolve_target_race(races, selection.circuit)
    if target is None:
        return StandingsTable(race=None, rows=())

    snapshot = [s for s in store.driver_standings if s.race_id == target.race_id]
    # sorted() is stable, so duplicated positions keep their input order
    snapshot = sorted(snapshot, key=lambda s: s.position)

    rows = []
    for s in snapshot:
        driver = store.driver(s.driver_id)
        if driver is None:
            logger.debug("Standing for unknown driver %s at race %s skipped", s.driver_id, s.race_id)
            continue
        rows.append(StandingRow(
            position=s.position,
            driver_id=s.driver_id,
            driver_name=driver.full_name,
            code=driver.code,
            points=s.points,
            wins=s.wins,
            is_highlighted=s.driver_id == selection.driver,
        ))

    return StandingsTable(race=target, rows=tuple(rows))

# gridlens/insight_engine.py

import logging
from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional, Tuple

from gridlens.config import CRASH_STATUS_IDS, INSIGHT_LIMIT
from gridlens.records import PitStop, Result, id_sort_key

logger = logging.getLogger(__name__)


@dataclass
class _Counts:
    races: int = 0
    gained: int = 0
    lost: int = 0
    crashes: int = 0
    fastest_lap_count: int = 0


@dataclass(frozen=True)
class DriverTally:
    driver_id: str
    driver_name: str
    surname: str
    code: str
    races: int = 0
    gained: int = 0
    lost: int = 0
    crashes: int = 0
    fastest_lap_count: int = 0


@dataclass(frozen=True)
class FastestLapRecord:
    driver_id: str
    code: str
    race_id: str
    race_name: str
    speed: float
    time: Optional[str]


@dataclass(frozen=True)
class PitStopRecord:
    driver_id: str
    code: str
    race_id: str
    race_name: str
    lap: int
    stop: int
    duration_s: float


@dataclass(frozen=True)
class InsightLists:
    gained: Tuple[DriverTally, ...]
    lost: Tuple[DriverTally, ...]
    crashes: Tuple[DriverTally, ...]
    fastest_laps: Tuple[FastestLapRecord, ...]
    fastest_lap_leaders: Tuple[DriverTally, ...]
    quickest_pit_stops: Tuple[PitStopRecord, ...]

    @property
    def is_empty(self) -> bool:
        return not (self.gained or self.fastest_laps or self.quickest_pit_stops)


class InsightEngine:
    """
    Season leaderboards: places gained and lost, crashes, fastest laps, pit work.
    Works on whatever result set the current selection produced.
    """

    @staticmethod
    def is_crash(result: Result) -> bool:
        return result.status_id in CRASH_STATUS_IDS

    @staticmethod
    def tally_drivers(store, results: Iterable[Result]) -> List[DriverTally]:
        """One pass over the results, one frozen tally per known driver."""
        counts = {}
        for res in results:
            stats = counts.get(res.driver_id)
            if stats is None:
                if store.driver(res.driver_id) is None:
                    logger.debug("Result for unknown driver %s skipped", res.driver_id)
                    continue
                stats = counts[res.driver_id] = _Counts()

            stats.races += 1
            # Pit-lane starts have no grid slot to gain or lose against
            if res.grid > 0:
                diff = res.grid - res.position_order
                stats.gained += max(0, diff)
                stats.lost += max(0, -diff)
            if InsightEngine.is_crash(res):
                stats.crashes += 1
            if res.fastest_lap_rank == 1:
                stats.fastest_lap_count += 1

        tallies = []
        for driver_id, stats in counts.items():
            driver = store.driver(driver_id)
            tallies.append(DriverTally(driver.driver_id, driver.full_name, driver.surname, driver.code, **asdict(stats)))
        return tallies

    @staticmethod
    def rank(tallies: Iterable[DriverTally], metric: str, limit: int = INSIGHT_LIMIT) -> Tuple[DriverTally, ...]:
        ordered = sorted(tallies, key=lambda t: (-getattr(t, metric), id_sort_key(t.driver_id)))
        return tuple(ordered[:limit])

    @staticmethod
    def fastest_laps(store, results: Iterable[Result], limit: int = INSIGHT_LIMIT) -> Tuple[FastestLapRecord, ...]:
        records = []
        for res in results:
            if res.fastest_lap_speed is None:
                continue
            driver = store.driver(res.driver_id)
            race = store.race(res.race_id)
            if driver is None or race is None:
                continue
            records.append(FastestLapRecord(
                driver_id=res.driver_id,
                code=driver.code,
                race_id=res.race_id,
                race_name=race.short_name,
                speed=res.fastest_lap_speed,
                time=res.fastest_lap_time,
            ))
        records.sort(key=lambda r: -r.speed)
        return tuple(records[:limit])

    @staticmethod
    def quickest_pit_stops(store, pit_stops: Iterable[PitStop], limit: int = INSIGHT_LIMIT) -> Tuple[PitStopRecord, ...]:
        records = []
        for p in pit_stops:
            if p.milliseconds is None:
                continue
            driver = store.driver(p.driver_id)
            race = store.race(p.race_id)
            if driver is None or race is None:
                continue
            records.append(PitStopRecord(
                driver_id=p.driver_id,
                code=driver.code,
                race_id=p.race_id,
                race_name=race.short_name,
                lap=p.lap,
                stop=p.stop,
                duration_s=p.milliseconds / 1000.0,
            ))
        records.sort(key=lambda r: r.duration_s)
        return tuple(records[:limit])

    @staticmethod
    def build(store, results: Iterable[Result], pit_stops: Iterable[PitStop] = (),
              limit: int = INSIGHT_LIMIT) -> InsightLists:
        results = list(results)
        tallies = InsightEngine.tally_drivers(store, results)
        lap_leaders = [t for t in tallies if t.fastest_lap_count > 0]

        return InsightLists(
            gained=InsightEngine.rank(tallies, "gained", limit),
            lost=InsightEngine.rank(tallies, "lost", limit),
            crashes=InsightEngine.rank(tallies, "crashes", limit),
            fastest_laps=InsightEngine.fastest_laps(store, results, limit),
            fastest_lap_leaders=InsightEngine.rank(lap_leaders, "fastest_lap_count", limit),
            quickest_pit_stops=InsightEngine.quickest_pit_stops(store, pit_stops, limit),
        )

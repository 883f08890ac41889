# gridlens/filters.py

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from gridlens.config import ALL
from gridlens.records import PitStop, Race, Result


# ==========================================
# 1. PURE FILTERS
# ==========================================
# Every function returns a new list and leaves its inputs untouched.

def races_of_year(races: Iterable[Race], year: int) -> List[Race]:
    """Races of one season in round order."""
    return sorted((r for r in races if r.year == year), key=lambda r: r.round)


def results_of_races(results: Iterable[Result], races: Iterable[Race]) -> List[Result]:
    race_ids = {r.race_id for r in races}
    return [r for r in results if r.race_id in race_ids]


def filter_by_circuit(results: Iterable[Result], races: Iterable[Race], circuit_id: str) -> List[Result]:
    if circuit_id == ALL:
        return list(results)
    race_ids = {r.race_id for r in races if r.circuit_id == circuit_id}
    return [r for r in results if r.race_id in race_ids]


def filter_by_driver(results: Iterable[Result], driver_id: str) -> List[Result]:
    if driver_id == ALL:
        return list(results)
    return [r for r in results if r.driver_id == driver_id]


def filter_pit_stops(pit_stops: Iterable[PitStop], results: Iterable[Result], driver_id: str) -> List[PitStop]:
    """Pit stops from the races present in `results`, optionally for one driver."""
    race_ids = {r.race_id for r in results}
    return [
        p for p in pit_stops
        if p.race_id in race_ids and (driver_id == ALL or p.driver_id == driver_id)
    ]


def last_race(races: Iterable[Race], circuit_id: str = ALL) -> Optional[Race]:
    """Highest-round race, optionally restricted to one circuit."""
    candidates = [r for r in races if circuit_id == ALL or r.circuit_id == circuit_id]
    if not candidates:
        return None
    return max(candidates, key=lambda r: (r.year, r.round))


# ==========================================
# 2. SEASON SLICE
# ==========================================

@dataclass(frozen=True)
class SeasonSlice:
    """Working subsets for one selection, shared by every downstream view."""
    year: int
    races: Tuple[Race, ...]
    season_results: Tuple[Result, ...]
    circuit_results: Tuple[Result, ...]
    selection_results: Tuple[Result, ...]
    pit_stops: Tuple[PitStop, ...]

    @property
    def is_empty(self) -> bool:
        return not self.races


def slice_season(store, selection) -> SeasonSlice:
    races = races_of_year(store.races, selection.year)
    season_results = results_of_races(store.results, races)
    circuit_results = filter_by_circuit(season_results, races, selection.circuit)
    selection_results = filter_by_driver(circuit_results, selection.driver)
    pit_stops = filter_pit_stops(store.pit_stops, selection_results, selection.driver)

    return SeasonSlice(
        year=selection.year,
        races=tuple(races),
        season_results=tuple(season_results),
        circuit_results=tuple(circuit_results),
        selection_results=tuple(selection_results),
        pit_stops=tuple(pit_stops),
    )

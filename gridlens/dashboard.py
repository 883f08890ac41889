# gridlens/dashboard.py

import logging
from dataclasses import dataclass
from typing import List, Tuple

from gridlens.config import DEFAULT_YEAR, MAX_YEAR, MIN_YEAR
from gridlens.filters import slice_season
from gridlens.insight_engine import InsightEngine, InsightLists
from gridlens.performance_matrix import MatrixView, build_matrix
from gridlens.records import Race, id_sort_key
from gridlens.selection import SelectionState
from gridlens.standings import StandingsTable, driver_standings
from gridlens.trajectory import DriverTrajectory, points_trajectories
from gridlens.world_map import CircuitMarker, circuit_markers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Option:
    value: str
    label: str


@dataclass(frozen=True)
class DashboardView:
    """Everything the page needs for one selection, fully resolved for display."""
    selection: SelectionState
    races: Tuple[Race, ...]
    markers: Tuple[CircuitMarker, ...]
    standings: StandingsTable
    trajectories: Tuple[DriverTrajectory, ...]
    matrix: MatrixView
    insights: InsightLists
    circuit_options: Tuple[Option, ...]
    driver_options: Tuple[Option, ...]

    @property
    def has_data(self) -> bool:
        return bool(self.races)


# ==========================================
# 1. OPTION LISTS
# ==========================================

def available_years(store, min_year=MIN_YEAR, max_year=MAX_YEAR) -> List[int]:
    """Seasons present in the data inside the supported window, newest first."""
    return sorted((y for y in store.years() if min_year <= y <= max_year), reverse=True)


def circuit_options(store, races) -> Tuple[Option, ...]:
    options = {}
    for race in races:
        circuit = store.circuit(race.circuit_id)
        if circuit is not None:
            options[circuit.circuit_id] = Option(circuit.circuit_id, circuit.name)
    return tuple(sorted(options.values(), key=lambda o: o.label))


def driver_options(store, results) -> Tuple[Option, ...]:
    options = {}
    for res in results:
        driver = store.driver(res.driver_id)
        if driver is not None:
            options[driver.driver_id] = Option(driver.driver_id, driver.full_name)
    return tuple(sorted(options.values(), key=lambda o: (o.label, id_sort_key(o.value))))


# ==========================================
# 2. ORCHESTRATOR
# ==========================================

class Dashboard:
    """
    Binds a loaded RecordStore to a SelectionState.
    Every selection change returns a freshly computed DashboardView.
    """

    def __init__(self, store, year=None):
        self.store = store
        if year is None:
            years = available_years(store)
            year = DEFAULT_YEAR if DEFAULT_YEAR in years or not years else years[0]
        self.selection = SelectionState(year=int(year))

    # --- SELECTION ENTRY POINTS ---
    def set_year(self, year) -> DashboardView:
        self.selection.set_year(year)
        return self.recompute()

    def set_circuit(self, circuit_id) -> DashboardView:
        self.selection.set_circuit(circuit_id)
        return self.recompute()

    def set_driver(self, driver_id) -> DashboardView:
        self.selection.set_driver(driver_id)
        return self.recompute()

    def toggle_circuit(self, circuit_id) -> DashboardView:
        self.selection.toggle_circuit(circuit_id)
        return self.recompute()

    def toggle_driver(self, driver_id) -> DashboardView:
        self.selection.toggle_driver(driver_id)
        return self.recompute()

    def reset_filters(self) -> DashboardView:
        self.selection.reset_filters()
        return self.recompute()

    # --- DERIVATION ---
    def recompute(self) -> DashboardView:
        """Full re-derivation from the store. Prior views are never reused."""
        selection = self.selection.snapshot()
        season = slice_season(self.store, selection)
        if season.is_empty:
            logger.info("No races for season %s", selection.year)

        return DashboardView(
            selection=selection,
            races=season.races,
            markers=circuit_markers(self.store, season.races, season.season_results, selection),
            standings=driver_standings(self.store, season.races, selection),
            trajectories=tuple(points_trajectories(
                self.store, season.races, season.season_results, selection.driver)),
            matrix=build_matrix(self.store, season, selection),
            insights=InsightEngine.build(self.store, season.selection_results, season.pit_stops),
            circuit_options=circuit_options(self.store, season.races),
            driver_options=driver_options(self.store, season.season_results),
        )

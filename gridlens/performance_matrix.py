# gridlens/performance_matrix.py

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

import numpy as np

from gridlens.config import PIT_LANE_PLOT_GRID
from gridlens.filters import last_race
from gridlens.records import Race, id_sort_key

logger = logging.getLogger(__name__)


# ==========================================
# 1. MODES
# ==========================================

class MatrixMode(Enum):
    SEASON = "SEASON"
    CIRCUIT = "CIRCUIT"
    DRIVER = "DRIVER"
    DRIVER_CIRCUIT = "DRIVER_CIRCUIT"


_MODES = {
    (False, False): MatrixMode.SEASON,
    (False, True): MatrixMode.CIRCUIT,
    (True, False): MatrixMode.DRIVER,
    (True, True): MatrixMode.DRIVER_CIRCUIT,
}


def select_mode(driver_selected: bool, circuit_selected: bool) -> MatrixMode:
    return _MODES[(bool(driver_selected), bool(circuit_selected))]


# ==========================================
# 2. VIEW SHAPES
# ==========================================

@dataclass(frozen=True)
class ScatterPoint:
    driver_id: str
    driver_name: str
    code: str
    avg_start: float
    avg_finish: float
    races: int

    @property
    def gained(self) -> bool:
        return self.avg_finish < self.avg_start


@dataclass(frozen=True)
class SeasonScatter:
    mode: ClassVar[MatrixMode] = MatrixMode.SEASON
    points: Tuple[ScatterPoint, ...]

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class GridRow:
    driver_id: str
    driver_name: str
    start: int
    finish: int
    delta: Optional[int]

    @property
    def pit_lane_start(self) -> bool:
        return self.start == 0


@dataclass(frozen=True)
class CircuitGrid:
    mode: ClassVar[MatrixMode] = MatrixMode.CIRCUIT
    race: Optional[Race]
    circuit_name: str
    rows: Tuple[GridRow, ...]

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class LollipopPoint:
    round: int
    race_id: str
    race_name: str
    circuit_name: str
    start: int
    finish: int
    delta: int
    pit_lane_start: bool


@dataclass(frozen=True)
class DriverSeasonDelta:
    mode: ClassVar[MatrixMode] = MatrixMode.DRIVER
    driver_id: str
    driver_name: str
    rounds: Tuple[int, ...]
    points: Tuple[LollipopPoint, ...]

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class HistoryEntry:
    year: int
    round: int
    race_name: str
    start: int
    finish: int


@dataclass(frozen=True)
class DriverCircuitHistory:
    mode: ClassVar[MatrixMode] = MatrixMode.DRIVER_CIRCUIT
    driver_id: str
    driver_name: str
    circuit_id: str
    circuit_name: str
    entries: Tuple[HistoryEntry, ...]

    @property
    def is_empty(self) -> bool:
        return not self.entries


MatrixView = Union[SeasonScatter, CircuitGrid, DriverSeasonDelta, DriverCircuitHistory]


# ==========================================
# 3. BUILDERS
# ==========================================

def season_scatter(store, results) -> SeasonScatter:
    """Average start vs average finish per driver over the season."""
    grouped = defaultdict(list)
    for res in results:
        grouped[res.driver_id].append(res)

    points = []
    for driver_id in sorted(grouped, key=id_sort_key):
        driver = store.driver(driver_id)
        if driver is None:
            logger.debug("Scatter row for unknown driver %s skipped", driver_id)
            continue
        rows = grouped[driver_id]
        # Pit-lane starts have no grid slot, so they drop out of the average
        grids = [r.grid for r in rows if r.grid > 0]
        finishes = [r.position_order for r in rows if r.position_order > 0]
        points.append(ScatterPoint(
            driver_id=driver_id,
            driver_name=driver.full_name,
            code=driver.code,
            avg_start=float(np.mean(grids)) if grids else float(PIT_LANE_PLOT_GRID),
            avg_finish=float(np.mean(finishes)) if finishes else float(PIT_LANE_PLOT_GRID),
            races=len(rows),
        ))
    return SeasonScatter(points=tuple(points))


def circuit_grid(store, races, results, circuit_id: str) -> CircuitGrid:
    """Start, finish and places won or lost by every driver at one race."""
    circuit = store.circuit(circuit_id)
    circuit_name = circuit.name if circuit else circuit_id
    race = last_race(races, circuit_id)
    if race is None:
        return CircuitGrid(race=None, circuit_name=circuit_name, rows=())

    race_results = sorted((r for r in results if r.race_id == race.race_id), key=lambda r: r.position_order)
    rows = []
    for res in race_results:
        driver = store.driver(res.driver_id)
        if driver is None:
            logger.debug("Grid row for unknown driver %s skipped", res.driver_id)
            continue
        rows.append(GridRow(
            driver_id=res.driver_id,
            driver_name=driver.full_name,
            start=res.grid,
            finish=res.position_order,
            delta=None if res.pit_lane_start else res.grid - res.position_order,
        ))
    return CircuitGrid(race=race, circuit_name=circuit_name, rows=tuple(rows))


def driver_season_delta(store, races, results, driver_id: str) -> DriverSeasonDelta:
    """One lollipop per round: where the driver started and where they finished."""
    driver = store.driver(driver_id)
    season_rounds = tuple(sorted({r.round for r in races}))
    if driver is None:
        logger.debug("Season delta for unknown driver %s skipped", driver_id)
        return DriverSeasonDelta(driver_id=driver_id, driver_name="", rounds=season_rounds, points=())
    rounds_by_race = {r.race_id: r for r in races}

    points = []
    for res in results:
        if res.driver_id != driver_id:
            continue
        race = rounds_by_race.get(res.race_id)
        if race is None:
            continue
        circuit = store.circuit(race.circuit_id)
        # Plot-only coercion: a pit-lane start is drawn at the back of the grid
        start = PIT_LANE_PLOT_GRID if res.pit_lane_start else res.grid
        points.append(LollipopPoint(
            round=race.round,
            race_id=race.race_id,
            race_name=race.name,
            circuit_name=circuit.name if circuit else race.circuit_id,
            start=start,
            finish=res.position_order,
            delta=start - res.position_order,
            pit_lane_start=res.pit_lane_start,
        ))

    return DriverSeasonDelta(
        driver_id=driver_id,
        driver_name=driver.full_name,
        rounds=season_rounds,
        points=tuple(sorted(points, key=lambda p: p.round)),
    )


def driver_circuit_history(store, driver_id: str, circuit_id: str) -> DriverCircuitHistory:
    """The driver's record at a circuit across every season in the store."""
    driver = store.driver(driver_id)
    circuit = store.circuit(circuit_id)
    circuit_name = circuit.name if circuit else circuit_id
    if driver is None:
        logger.debug("Circuit history for unknown driver %s skipped", driver_id)
        return DriverCircuitHistory(driver_id=driver_id, driver_name="", circuit_id=circuit_id,
                                    circuit_name=circuit_name, entries=())
    races_here = {r.race_id: r for r in store.races if r.circuit_id == circuit_id}

    entries = [
        HistoryEntry(
            year=races_here[res.race_id].year,
            round=races_here[res.race_id].round,
            race_name=races_here[res.race_id].name,
            start=res.grid,
            finish=res.position_order,
        )
        for res in store.results
        if res.driver_id == driver_id and res.race_id in races_here
    ]

    return DriverCircuitHistory(
        driver_id=driver_id,
        driver_name=driver.full_name,
        circuit_id=circuit_id,
        circuit_name=circuit_name,
        entries=tuple(sorted(entries, key=lambda e: (e.year, e.round))),
    )


def build_matrix(store, season, selection) -> MatrixView:
    mode = select_mode(selection.driver_selected, selection.circuit_selected)

    if mode is MatrixMode.SEASON:
        return season_scatter(store, season.season_results)
    if mode is MatrixMode.CIRCUIT:
        return circuit_grid(store, season.races, season.season_results, selection.circuit)
    if mode is MatrixMode.DRIVER:
        return driver_season_delta(store, season.races, season.season_results, selection.driver)
    return driver_circuit_history(store, selection.driver, selection.circuit)

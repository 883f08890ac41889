# gridlens/trajectory.py

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from gridlens.config import ALL, TRAJECTORY_TOP_N
from gridlens.records import Race, Result, id_sort_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrajectoryPoint:
    round: int
    points: float


@dataclass(frozen=True)
class DriverTrajectory:
    driver_id: str
    code: str
    driver_name: str
    series: Tuple[TrajectoryPoint, ...]
    total: float
    is_selected: bool
    in_top: bool


def points_trajectories(store, races: Iterable[Race], results: Iterable[Result],
                        selected_driver: str = ALL, top_n: int = TRAJECTORY_TOP_N) -> List[DriverTrajectory]:
    """
    Cumulative championship points per round for the season leaders,
    plus the selected driver when they are outside the top_n.
    """
    rounds_by_race = {r.race_id: r.round for r in races}
    rounds = sorted(set(rounds_by_race.values()))
    if not rounds:
        return []

    # driver -> round -> points scored that round
    scored = defaultdict(lambda: defaultdict(float))
    for res in results:
        rnd = rounds_by_race.get(res.race_id)
        if rnd is None:
            continue
        scored[res.driver_id][rnd] += res.points

    dataset = []
    for driver_id, per_round in scored.items():
        driver = store.driver(driver_id)
        if driver is None:
            logger.debug("Results for unknown driver %s skipped", driver_id)
            continue

        running = 0.0
        series = []
        # Walk every round so rounds without a result carry the total forward
        for rnd in rounds:
            running += per_round.get(rnd, 0.0)
            series.append(TrajectoryPoint(round=rnd, points=running))
        dataset.append((driver, tuple(series), running))

    ranked = sorted(dataset, key=lambda d: (-d[2], id_sort_key(d[0].driver_id)))
    top_ids = {d[0].driver_id for d in ranked[:top_n]}

    chosen = list(ranked[:top_n])
    if selected_driver != ALL and selected_driver not in top_ids:
        chosen.extend(d for d in ranked if d[0].driver_id == selected_driver)

    return [
        DriverTrajectory(
            driver_id=driver.driver_id,
            code=driver.code,
            driver_name=driver.full_name,
            series=series,
            total=total,
            is_selected=driver.driver_id == selected_driver,
            in_top=driver.driver_id in top_ids,
        )
        for driver, series, total in chosen
    ]

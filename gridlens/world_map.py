# gridlens/world_map.py

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from gridlens.records import Race, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerResult:
    position: int
    points: float

    @property
    def scored(self) -> bool:
        return self.points > 0


@dataclass(frozen=True)
class CircuitMarker:
    circuit_id: str
    name: str
    location: str
    country: str
    lat: float
    lng: float
    race_id: str
    round: int
    is_selected: bool
    scored: Optional[bool]
    dimmed: bool
    driver_result: Optional[MarkerResult]


def circuit_markers(store, races: Iterable[Race], results: Iterable[Result], selection) -> Tuple[CircuitMarker, ...]:
    """
    One marker per circuit visited in the season.
    With a driver picked, markers say whether that driver scored there.
    """
    races = sorted(races, key=lambda r: r.round)
    results = list(results)

    # First race at each circuit, in calendar order
    first_race = {}
    for race in races:
        first_race.setdefault(race.circuit_id, race)

    driver_results = {}
    if selection.driver_selected:
        for res in results:
            if res.driver_id == selection.driver:
                driver_results.setdefault(res.race_id, res)

    markers = []
    for circuit_id, race in first_race.items():
        circuit = store.circuit(circuit_id)
        if circuit is None:
            logger.debug("Race %s points at unknown circuit %s", race.race_id, circuit_id)
            continue

        is_selected = circuit_id == selection.circuit
        res = driver_results.get(race.race_id)
        driver_result = MarkerResult(res.position_order, res.points) if res else None
        scored = (driver_result is not None and driver_result.scored) if selection.driver_selected else None

        if is_selected:
            dimmed = False
        elif selection.circuit_selected:
            dimmed = True
        else:
            dimmed = scored is False

        markers.append(CircuitMarker(
            circuit_id=circuit_id,
            name=circuit.name,
            location=circuit.location,
            country=circuit.country,
            lat=circuit.lat,
            lng=circuit.lng,
            race_id=race.race_id,
            round=race.round,
            is_selected=is_selected,
            scored=scored,
            dimmed=dimmed,
            driver_result=driver_result,
        ))
    return tuple(markers)

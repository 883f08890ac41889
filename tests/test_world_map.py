from gridlens.filters import races_of_year, results_of_races
from gridlens.selection import SelectionState
from gridlens.world_map import circuit_markers


def _markers(store, **selection):
    races = races_of_year(store.races, 2023)
    results = results_of_races(store.results, races)
    return circuit_markers(store, races, results, SelectionState(**selection))


def test_one_marker_per_circuit_in_calendar_order(store):
    markers = _markers(store, year=2023)

    assert [m.circuit_id for m in markers] == ["10", "11"]
    assert markers[0].race_id == "100"
    assert all(m.scored is None and not m.dimmed for m in markers)


def test_selected_circuit_dims_the_others(store):
    markers = {m.circuit_id: m for m in _markers(store, year=2023, circuit="11")}

    assert markers["11"].is_selected and not markers["11"].dimmed
    assert markers["10"].dimmed


def test_driver_scoring_state(store):
    markers = {m.circuit_id: m for m in _markers(store, year=2023, driver="5")}

    # zero points in round 1, absent in round 2
    assert markers["10"].scored is False
    assert markers["10"].driver_result.position == 5
    assert markers["11"].scored is False
    assert markers["11"].driver_result is None
    assert all(m.dimmed for m in markers.values())


def test_driver_who_scored_everywhere(store):
    markers = _markers(store, year=2023, driver="1")

    assert all(m.scored for m in markers)
    assert not any(m.dimmed for m in markers)


def test_empty_season(store):
    assert circuit_markers(store, [], [], SelectionState(year=1999)) == ()

from gridlens.config import ALL
from gridlens.filters import races_of_year, results_of_races
from gridlens.records import Race, Result
from gridlens.trajectory import points_trajectories


def _season(store, year=2023):
    races = races_of_year(store.races, year)
    return races, results_of_races(store.results, races)


def test_top_three_by_total(store):
    races, results = _season(store)
    trajectories = points_trajectories(store, races, results)

    assert [t.code for t in trajectories] == ["VER", "HAM", "NOR"]
    assert [t.total for t in trajectories] == [68.0, 61.0, 39.0]
    assert all(t.in_top for t in trajectories)


def test_series_is_dense_monotone_and_ends_at_total(store):
    races, results = _season(store)
    for t in points_trajectories(store, races, results, selected_driver="5"):
        points = [p.points for p in t.series]
        assert len(t.series) == len(races)
        assert points == sorted(points)
        assert t.series[-1].points == t.total


def test_selected_driver_outside_top_is_appended(store):
    races, results = _season(store)
    trajectories = points_trajectories(store, races, results, selected_driver="5")

    assert [t.code for t in trajectories] == ["VER", "HAM", "NOR", "ALO"]
    alonso = trajectories[-1]
    assert alonso.is_selected
    assert not alonso.in_top
    # no result in round 2: total carried forward
    assert [(p.round, p.points) for p in alonso.series] == [(1, 0.0), (2, 0.0), (3, 10.0)]


def test_selected_driver_inside_top_is_not_duplicated(store):
    races, results = _season(store)
    trajectories = points_trajectories(store, races, results, selected_driver="1")

    assert [t.code for t in trajectories] == ["VER", "HAM", "NOR"]
    assert [t.is_selected for t in trajectories] == [False, True, False]


def test_unknown_driver_is_skipped(store):
    races, results = _season(store)
    trajectories = points_trajectories(store, races, results, selected_driver="77", top_n=10)

    assert "77" not in {t.driver_id for t in trajectories}


def test_series_follows_round_order_not_result_order(store):
    races = [Race("2", 2021, 2, "c", "B"), Race("1", 2021, 1, "c", "A")]
    results = [
        Result("2", "1", 1, 1, 25.0, "1"),
        Result("1", "1", 1, 2, 18.0, "1"),
    ]
    [t] = points_trajectories(store, races, results)

    assert [(p.round, p.points) for p in t.series] == [(1, 18.0), (2, 43.0)]


def test_empty_season(store):
    assert points_trajectories(store, [], [], ALL) == []

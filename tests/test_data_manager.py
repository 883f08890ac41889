import pytest

from gridlens.data_manager import DataLoadError, DataManager, load_record_store

TABLES = {
    "races.csv": (
        "raceId,year,round,circuitId,name,date,time\n"
        "1,2023,1,10,Bahrain Grand Prix,2023-03-05,15:00:00\n"
        "2,2023,2,11,Saudi Arabian Grand Prix,2023-03-19,\\N\n"
        "3,2023,\\N,11,Broken Round Grand Prix,2023-04-01,\\N\n"
    ),
    "results.csv": (
        "resultId,raceId,driverId,grid,positionOrder,points,statusId,rank,fastestLapTime,fastestLapSpeed\n"
        "1,1,830,1,1,25,1,1,1:33.996,207.235\n"
        "2,1,815,0,2,18,1,\\N,\\N,\\N\n"
        "3,2,830,15,2,18.5,4,2,1:31.906,241.9\n"
    ),
    "drivers.csv": (
        "driverId,driverRef,number,code,forename,surname\n"
        "830,max_verstappen,33,VER,Max,Verstappen\n"
        "815,perez,11,\\N,Sergio,Pérez\n"
    ),
    "circuits.csv": (
        "circuitId,circuitRef,name,location,country,lat,lng,alt\n"
        "10,bahrain,Bahrain International Circuit,Sakhir,Bahrain,26.0325,50.5106,7\n"
        "11,jeddah,Jeddah Corniche Circuit,Jeddah,Saudi Arabia,21.6319,39.1044,15\n"
    ),
    "driver_standings.csv": (
        "driverStandingsId,raceId,driverId,points,position,positionText,wins\n"
        "1,2,830,43,1,1,1\n"
        "2,2,815,18,2,2,0\n"
    ),
    "pit_stops.csv": (
        "raceId,driverId,stop,lap,time,duration,milliseconds\n"
        "1,830,1,17,15:40:00,22.512,22512\n"
        "1,815,1,20,15:45:00,\\N,\\N\n"
    ),
    "status.csv": (
        "statusId,status\n"
        "1,Finished\n"
        "4,Collision\n"
    ),
}


@pytest.fixture
def data_dir(tmp_path):
    for name, text in TABLES.items():
        (tmp_path / name).write_text(text, encoding="utf-8")
    return tmp_path


def test_load_coerces_numbers_once(data_dir):
    store = load_record_store(str(data_dir))

    race = store.race("1")
    assert (race.year, race.round) == (2023, 1)
    result = next(r for r in store.results if r.race_id == "2")
    assert result.grid == 15
    assert result.points == 18.5
    assert result.fastest_lap_speed == pytest.approx(241.9)
    assert store.driver_standings[0].wins == 1
    assert store.circuit("11").lat == pytest.approx(21.6319)


def test_na_token_is_absent_not_zero(data_dir):
    store = load_record_store(str(data_dir))

    perez = next(r for r in store.results if r.driver_id == "815")
    assert perez.fastest_lap_rank is None
    assert perez.fastest_lap_speed is None
    assert perez.fastest_lap_time is None
    assert store.races_by_id["2"].date == "2023-03-19"
    assert store.pit_stops[1].milliseconds is None


def test_rows_with_unusable_required_values_are_dropped(data_dir):
    store = load_record_store(str(data_dir))

    assert store.race("3") is None
    assert len(store.races) == 2


def test_missing_driver_code_falls_back_to_surname(data_dir):
    store = load_record_store(str(data_dir))

    assert store.driver("815").code == "PÉR"
    assert store.driver("830").full_name == "Max Verstappen"


def test_status_labels(data_dir):
    store = load_record_store(str(data_dir))

    assert store.status_label("4") == "Collision"


def test_missing_file_is_a_load_error(data_dir):
    (data_dir / "pit_stops.csv").unlink()

    with pytest.raises(DataLoadError, match="pit_stops"):
        load_record_store(str(data_dir))


def test_missing_column_is_a_load_error(data_dir):
    (data_dir / "results.csv").write_text("raceId,driverId\n1,830\n", encoding="utf-8")

    with pytest.raises(DataLoadError, match="grid"):
        load_record_store(str(data_dir))


def test_manager_reports_success(data_dir):
    dm = DataManager(str(data_dir))
    ok, msg = dm.load()

    assert ok
    assert dm.is_ready
    assert "2 races" in msg
    assert dm.require_store() is dm.store


def test_manager_stays_not_ready_after_failure(data_dir):
    (data_dir / "status.csv").write_text("", encoding="utf-8")
    dm = DataManager(str(data_dir))
    ok, msg = dm.load()

    assert not ok
    assert not dm.is_ready
    assert dm.store is None
    with pytest.raises(DataLoadError):
        dm.require_store()


def test_failed_reload_drops_previous_store(data_dir):
    dm = DataManager(str(data_dir))
    assert dm.load()[0]

    (data_dir / "drivers.csv").unlink()
    ok, _ = dm.load()

    assert not ok
    assert dm.store is None


def test_nonfinite_year_leaves_manager_not_ready(data_dir):
    (data_dir / "races.csv").write_text(
        "raceId,year,round,circuitId,name,date\n1,inf,1,10,Bahrain Grand Prix,2023-03-05\n", encoding="utf-8")
    dm = DataManager(str(data_dir))
    ok, msg = dm.load()

    assert not ok
    assert "races" in msg
    assert not dm.is_ready


def test_nonfinite_and_fractional_numbers_are_unusable(data_dir):
    (data_dir / "results.csv").write_text(
        "raceId,driverId,grid,positionOrder,points,statusId,rank,fastestLapTime,fastestLapSpeed\n"
        "1,830,1,1,25,1,1e400,1:33.996,inf\n"
        "1,815,1.5,2,18,1,\\N,\\N,\\N\n"
        "2,815,3,2,-inf,1,\\N,\\N,\\N\n"
        "2,830,2,1,25,1,1,\\N,\\N\n",
        encoding="utf-8")
    store = load_record_store(str(data_dir))

    assert [(r.race_id, r.driver_id) for r in store.results] == [("1", "830"), ("2", "830")]
    first = store.results[0]
    assert first.fastest_lap_rank is None
    assert first.fastest_lap_speed is None
    assert store.results[1].grid == 2


def test_text_only_tables_drop_incomplete_rows(data_dir):
    (data_dir / "status.csv").write_text("statusId,status\n1,Finished\n\\N,Orphan\n", encoding="utf-8")
    store = load_record_store(str(data_dir))

    assert [s.status_id for s in store.statuses] == ["1"]

import pytest

from gridlens.records import Circuit, Driver, DriverStanding, PitStop, Race, Result, Status
from gridlens.store import RecordStore


def _result(race_id, driver_id, grid, pos, points, status="1", rank=None, speed=None, lap_time=None):
    return Result(
        race_id=race_id,
        driver_id=driver_id,
        grid=grid,
        position_order=pos,
        points=points,
        status_id=status,
        fastest_lap_rank=rank,
        fastest_lap_speed=speed,
        fastest_lap_time=lap_time,
    )


@pytest.fixture
def store() -> RecordStore:
    """
    2023: three rounds, Bahrain hosts rounds 1 and 3, Monza round 2.
    2022: a single Monza round. Races are stored out of calendar order.
    """
    races = [
        Race("101", 2023, 2, "11", "Italian Grand Prix"),
        Race("100", 2023, 1, "10", "Bahrain Grand Prix"),
        Race("90", 2022, 1, "11", "Italian Grand Prix"),
        Race("102", 2023, 3, "10", "Sakhir Grand Prix"),
    ]
    drivers = [
        Driver("1", "Lewis", "Hamilton", "HAM"),
        Driver("2", "Max", "Verstappen", "VER"),
        Driver("3", "Charles", "Leclerc", "LEC"),
        Driver("4", "Lando", "Norris", "NOR"),
        Driver("5", "Fernando", "Alonso", "ALO"),
    ]
    circuits = [
        Circuit("10", "Bahrain International Circuit", "Sakhir", "Bahrain", 26.0325, 50.5106),
        Circuit("11", "Autodromo Nazionale di Monza", "Monza", "Italy", 45.6156, 9.28111),
        Circuit("12", "Silverstone Circuit", "Silverstone", "UK", 52.0786, -1.01694),
    ]
    results = [
        # round 1
        _result("100", "2", 1, 1, 25.0, rank=1, speed=210.5, lap_time="1:33.996"),
        _result("100", "1", 3, 2, 18.0, rank=2, speed=209.1, lap_time="1:34.500"),
        _result("100", "3", 2, 3, 15.0),
        _result("100", "4", 0, 4, 12.0),
        _result("100", "5", 5, 5, 0.0, status="3"),
        # round 2, Alonso absent, driver 77 unknown
        _result("101", "2", 2, 2, 18.0),
        _result("101", "1", 1, 1, 25.0, rank=1, speed=250.0, lap_time="1:21.046"),
        _result("101", "3", 4, 3, 15.0),
        _result("101", "4", 3, 4, 12.0),
        _result("101", "77", 6, 5, 10.0),
        # round 3
        _result("102", "2", 1, 1, 25.0),
        _result("102", "1", 5, 2, 18.0),
        _result("102", "3", 3, 8, 4.0),
        _result("102", "4", 4, 3, 15.0),
        _result("102", "5", 2, 5, 10.0, status="20"),
        # 2022
        _result("90", "1", 2, 1, 25.0),
        _result("90", "2", 1, 2, 18.0),
    ]
    standings = [
        DriverStanding("101", "2", 1, 43.0, 1),
        DriverStanding("101", "1", 2, 43.0, 1),
        DriverStanding("101", "3", 3, 30.0, 0),
        DriverStanding("101", "4", 4, 24.0, 0),
        DriverStanding("101", "5", 5, 0.0, 0),
        DriverStanding("102", "4", 3, 39.0, 0),
        DriverStanding("102", "2", 1, 68.0, 2),
        DriverStanding("102", "99", 6, 1.0, 0),
        DriverStanding("102", "1", 2, 61.0, 1),
        DriverStanding("102", "5", 5, 10.0, 0),
        DriverStanding("102", "3", 4, 34.0, 0),
    ]
    pit_stops = [
        PitStop("100", "2", 1, 20, "22.500", 22500),
        PitStop("100", "1", 1, 18, "21.900", 21900),
        PitStop("101", "1", 1, 25, None, None),
        PitStop("90", "1", 1, 30, "23.000", 23000),
    ]
    statuses = [
        Status("1", "Finished"),
        Status("3", "Accident"),
        Status("4", "Collision"),
        Status("20", "Spun off"),
    ]
    return RecordStore.build(
        races=races,
        results=results,
        drivers=drivers,
        circuits=circuits,
        driver_standings=standings,
        pit_stops=pit_stops,
        statuses=statuses,
    )

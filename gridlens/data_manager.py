# gridlens/data_manager.py

import logging
import os

import numpy as np
import pandas as pd

from gridlens.config import DATA_DIR, NA_TOKEN, TABLE_FILES
from gridlens.records import Circuit, Driver, DriverStanding, PitStop, Race, Result, Status
from gridlens.store import RecordStore

# SETUP LOGGING
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


class DataLoadError(Exception):
    """A table could not be read or lacks the columns the dashboard needs."""


# ==========================================
# 1. CSV INGESTION
# ==========================================

def read_table(data_dir, table, columns):
    """Reads one CSV as strings. The NA token and empty cells become NaN."""
    path = os.path.join(data_dir, TABLE_FILES[table])
    if not os.path.isfile(path):
        raise DataLoadError(f"Missing {table} table: {path}")

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[NA_TOKEN, ""])
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DataLoadError(f"Could not parse {path}: {e}") from e

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DataLoadError(f"{table} table is missing columns: {', '.join(missing)}")
    return df[list(columns)]


def drop_incomplete(df, table, required):
    """Drops rows missing any required field, with one warning per table."""
    bad = df[list(required)].isna().any(axis=1)
    if bad.any():
        logging.warning(f"⚠️ {table}: dropped {int(bad.sum())} rows with unusable values")
        df = df[~bad]
    return df


def coerce_numeric(df, table, ints=(), floats=(), required=()):
    """
    Converts numeric columns once, at ingestion.
    Non-numbers, infinities and fractional counts become NaN. Rows whose
    required fields end up absent are dropped.
    """
    df = df.copy()
    for col in (*ints, *floats):
        values = pd.to_numeric(df[col], errors="coerce").astype(float)
        unusable = ~np.isfinite(values)
        if col in ints:
            unusable |= values % 1 != 0
        df[col] = values.mask(unusable)
    return drop_incomplete(df, table, required) if required else df


def _opt(value):
    return None if pd.isna(value) else value


def _opt_int(value):
    return None if pd.isna(value) else int(value)


def _opt_float(value):
    return None if pd.isna(value) else float(value)


# ==========================================
# 2. TABLE → RECORDS
# ==========================================

def parse_races(data_dir):
    df = read_table(data_dir, "races", ["raceId", "year", "round", "circuitId", "name", "date"])
    df = coerce_numeric(df, "races", ints=["year", "round"],
                        required=["raceId", "year", "round", "circuitId"])
    if df.empty:
        raise DataLoadError("races table has no usable rows")
    return [
        Race(
            race_id=row["raceId"],
            year=int(row["year"]),
            round=int(row["round"]),
            circuit_id=row["circuitId"],
            name=_opt(row["name"]) or "",
            date=_opt(row["date"]),
        )
        for row in df.to_dict("records")
    ]


def parse_results(data_dir):
    df = read_table(data_dir, "results", [
        "raceId", "driverId", "grid", "positionOrder", "points", "statusId",
        "rank", "fastestLapTime", "fastestLapSpeed",
    ])
    df = coerce_numeric(df, "results",
                        ints=["grid", "positionOrder", "rank"],
                        floats=["points", "fastestLapSpeed"],
                        required=["raceId", "driverId", "grid", "positionOrder", "points"])
    return [
        Result(
            race_id=row["raceId"],
            driver_id=row["driverId"],
            grid=int(row["grid"]),
            position_order=int(row["positionOrder"]),
            points=float(row["points"]),
            status_id=_opt(row["statusId"]) or "",
            fastest_lap_rank=_opt_int(row["rank"]),
            fastest_lap_speed=_opt_float(row["fastestLapSpeed"]),
            fastest_lap_time=_opt(row["fastestLapTime"]),
        )
        for row in df.to_dict("records")
    ]


def parse_drivers(data_dir):
    df = read_table(data_dir, "drivers", ["driverId", "code", "forename", "surname"])
    df = drop_incomplete(df, "drivers", ["driverId", "surname"])
    drivers = []
    for row in df.to_dict("records"):
        surname = row["surname"]
        # Pre-2000s drivers have no official code
        code = _opt(row["code"]) or surname[:3].upper()
        drivers.append(Driver(
            driver_id=row["driverId"],
            forename=_opt(row["forename"]) or "",
            surname=surname,
            code=code,
        ))
    return drivers


def parse_circuits(data_dir):
    df = read_table(data_dir, "circuits", ["circuitId", "name", "location", "country", "lat", "lng"])
    df = coerce_numeric(df, "circuits", floats=["lat", "lng"], required=["circuitId", "lat", "lng"])
    return [
        Circuit(
            circuit_id=row["circuitId"],
            name=_opt(row["name"]) or row["circuitId"],
            location=_opt(row["location"]) or "",
            country=_opt(row["country"]) or "",
            lat=float(row["lat"]),
            lng=float(row["lng"]),
        )
        for row in df.to_dict("records")
    ]


def parse_driver_standings(data_dir):
    df = read_table(data_dir, "driver_standings", ["raceId", "driverId", "points", "position", "wins"])
    df = coerce_numeric(df, "driver_standings",
                        ints=["position", "wins"], floats=["points"],
                        required=["raceId", "driverId", "points", "position", "wins"])
    return [
        DriverStanding(
            race_id=row["raceId"],
            driver_id=row["driverId"],
            position=int(row["position"]),
            points=float(row["points"]),
            wins=int(row["wins"]),
        )
        for row in df.to_dict("records")
    ]


def parse_pit_stops(data_dir):
    df = read_table(data_dir, "pit_stops", ["raceId", "driverId", "stop", "lap", "duration", "milliseconds"])
    df = coerce_numeric(df, "pit_stops", ints=["stop", "lap", "milliseconds"],
                        required=["raceId", "driverId", "stop", "lap"])
    return [
        PitStop(
            race_id=row["raceId"],
            driver_id=row["driverId"],
            stop=int(row["stop"]),
            lap=int(row["lap"]),
            duration=_opt(row["duration"]),
            milliseconds=_opt_int(row["milliseconds"]),
        )
        for row in df.to_dict("records")
    ]


def parse_statuses(data_dir):
    df = read_table(data_dir, "status", ["statusId", "status"])
    df = drop_incomplete(df, "status", ["statusId"])
    return [Status(status_id=row["statusId"], label=_opt(row["status"]) or "") for row in df.to_dict("records")]


def load_record_store(data_dir=DATA_DIR) -> RecordStore:
    """Reads every table or raises. A partial store is never returned."""
    return RecordStore.build(
        races=parse_races(data_dir),
        results=parse_results(data_dir),
        drivers=parse_drivers(data_dir),
        circuits=parse_circuits(data_dir),
        driver_standings=parse_driver_standings(data_dir),
        pit_stops=parse_pit_stops(data_dir),
        statuses=parse_statuses(data_dir),
    )


# ==========================================
# 3. SESSION-LEVEL LOADER
# ==========================================

class DataManager:
    """
    Owns the record store for a dashboard session.
    Until load() succeeds the manager is 'not ready' and serves nothing.
    """
    def __init__(self, data_dir=DATA_DIR):
        self.data_dir = data_dir
        self.store = None
        self.error = None

    @property
    def is_ready(self):
        return self.store is not None

    def load(self):
        """Loads all tables. Returns (success, message)."""
        self.store = None
        self.error = None
        try:
            store = load_record_store(self.data_dir)
        except DataLoadError as e:
            self.error = str(e)
            logging.error(f"❌ Failed to load dataset: {e}")
            return False, self.error

        self.store = store
        logging.info(f"✅ Dataset Loaded: {len(store.races)} races, {len(store.results)} results from {self.data_dir}")
        return True, f"Dataset Loaded: {len(store.races)} races across {len(store.years())} seasons"

    def require_store(self) -> RecordStore:
        if self.store is None:
            raise DataLoadError(self.error or "Dataset not loaded")
        return self.store

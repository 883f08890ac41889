# gridlens/config.py

import os

# ==========================================
# DATA SOURCES
# ==========================================
DATA_DIR = os.environ.get("GRIDLENS_DATA_DIR", os.path.join("assets", "data"))

TABLE_FILES = {
    "races": "races.csv",
    "results": "results.csv",
    "drivers": "drivers.csv",
    "circuits": "circuits.csv",
    "driver_standings": "driver_standings.csv",
    "pit_stops": "pit_stops.csv",
    "status": "status.csv",
}

# Ergast marks missing values with a literal backslash-N
NA_TOKEN = "\\N"

# ==========================================
# SELECTION DEFAULTS
# ==========================================
ALL = "all"
DEFAULT_YEAR = 2023
MIN_YEAR = 2010
MAX_YEAR = 2025

# ==========================================
# AGGREGATION POLICY
# ==========================================
# Accident, Collision, Spun off, Fatal accident
CRASH_STATUS_IDS = frozenset({"3", "4", "20", "104"})

TRAJECTORY_TOP_N = 3
INSIGHT_LIMIT = 10

# Back of the grid, used when plotting a pit-lane start
PIT_LANE_PLOT_GRID = 20

from gridlens.dashboard import Dashboard, DashboardView, available_years
from gridlens.data_manager import DataLoadError, DataManager, load_record_store
from gridlens.selection import SelectionState
from gridlens.store import RecordStore

__all__ = [
    "Dashboard",
    "DashboardView",
    "DataLoadError",
    "DataManager",
    "RecordStore",
    "SelectionState",
    "available_years",
    "load_record_store",
]

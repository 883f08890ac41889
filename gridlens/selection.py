# gridlens/selection.py

from dataclasses import dataclass, replace

from gridlens.config import ALL, DEFAULT_YEAR


@dataclass
class SelectionState:
    """Current dashboard filter. Change it through the set_* methods only."""
    year: int = DEFAULT_YEAR
    circuit: str = ALL
    driver: str = ALL

    @property
    def circuit_selected(self) -> bool:
        return self.circuit != ALL

    @property
    def driver_selected(self) -> bool:
        return self.driver != ALL

    def set_year(self, year):
        # A new season invalidates the circuit and driver picks
        self.year = int(year)
        self.circuit = ALL
        self.driver = ALL

    def set_circuit(self, circuit_id):
        self.circuit = str(circuit_id) if circuit_id is not None else ALL

    def set_driver(self, driver_id):
        self.driver = str(driver_id) if driver_id is not None else ALL

    def toggle_circuit(self, circuit_id):
        """Clicking the selected circuit again clears it."""
        self.set_circuit(ALL if str(circuit_id) == self.circuit else circuit_id)

    def toggle_driver(self, driver_id):
        self.set_driver(ALL if str(driver_id) == self.driver else driver_id)

    def reset_filters(self):
        self.circuit = ALL
        self.driver = ALL

    def snapshot(self) -> "SelectionState":
        return replace(self)

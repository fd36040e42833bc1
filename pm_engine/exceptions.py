"""
Exceptions for the Predictive Maintenance Engine.

Partial data is never an error here; only configuration faults are.
"""


class PMEngineError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(PMEngineError, ValueError):
    """Raised when settings or reference data are unusable."""


class UnknownEquipmentTypeError(ConfigurationError):
    """Raised when an equipment type has no OEM profile."""

    def __init__(self, equipment_type: str):
        self.equipment_type = equipment_type
        super().__init__(f"No OEM profile registered for equipment type '{equipment_type}'")

"""
Collaborator Interfaces

Abstract interfaces for the read-only collaborators the engine consumes.
All lookups are async so that database- or service-backed implementations
can be plugged in without changing the orchestration.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from pm_engine.models.history import EquipmentIssue, FleetPattern, HistoricalRecords


class HistoricalRecordsProvider(ABC):
    """Supplies work orders, inspections and oil analyses for an equipment item."""

    @abstractmethod
    async def get_records(self, asset_id: str, equipment_id: str) -> HistoricalRecords:
        """
        Fetch history for one (asset, equipment) pair.

        Args:
            asset_id: Asset identifier
            equipment_id: Equipment identifier on that asset

        Returns:
            HistoricalRecords, each list sorted most recent first
        """
        ...


class FleetPatternCatalog(ABC):
    """Cross-fleet failure pattern statistics."""

    @abstractmethod
    async def get_patterns(self, equipment_type: Optional[str] = None) -> List[FleetPattern]:
        """Patterns for one equipment type, or all patterns when type is None."""
        ...


class KnownIssueLookup(ABC):
    """External feed of authoritative per-equipment status."""

    @abstractmethod
    async def find_issue(self, asset_id: str, equipment_name: str) -> Optional[EquipmentIssue]:
        """Return the override for this equipment item, or None."""
        ...


class NullKnownIssueLookup(KnownIssueLookup):
    """Lookup used when no override feed is configured."""

    async def find_issue(self, asset_id: str, equipment_name: str) -> Optional[EquipmentIssue]:
        return None

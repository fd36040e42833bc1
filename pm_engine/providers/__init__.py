# Collaborator providers package
from pm_engine.providers.base import (
    FleetPatternCatalog,
    HistoricalRecordsProvider,
    KnownIssueLookup,
    NullKnownIssueLookup,
)
from pm_engine.providers.oem_store import OEMProfileStore
from pm_engine.providers.fleet_catalog import StaticFleetPatternCatalog
from pm_engine.providers.known_issues import StaticKnownIssueLookup, match_equipment_issue
from pm_engine.providers.seeded_history import SeededHistoryProvider

__all__ = [
    'FleetPatternCatalog', 'HistoricalRecordsProvider', 'KnownIssueLookup', 'NullKnownIssueLookup',
    'OEMProfileStore', 'StaticFleetPatternCatalog', 'StaticKnownIssueLookup', 'match_equipment_issue',
    'SeededHistoryProvider',
]

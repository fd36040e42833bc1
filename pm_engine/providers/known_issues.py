"""
Known-Issue Override Lookup

In-memory implementation of the external known-issue feed. Issues are
registered per asset and matched to equipment by name.
"""

import logging
from typing import Dict, Iterable, List, Optional

from pm_engine.models.history import EquipmentIssue
from pm_engine.providers.base import KnownIssueLookup

logger = logging.getLogger(__name__)


def match_equipment_issue(issues: Iterable[EquipmentIssue], equipment_name: str) -> Optional[EquipmentIssue]:
    """
    Find the issue that refers to an equipment item.

    Matching is case-insensitive on first words: an issue matches when the
    equipment name contains the issue name's first word, or the issue name
    contains the equipment name's first word. First match wins.
    """
    name_lower = equipment_name.lower()
    words = name_lower.split()
    equip_first_word = words[0] if words else ""

    for issue in issues:
        issue_name_lower = issue.equipment_name.lower()
        issue_words = issue_name_lower.split()
        issue_first_word = issue_words[0] if issue_words else ""
        if not issue_first_word or not equip_first_word:
            continue
        if issue_first_word in name_lower or equip_first_word in issue_name_lower:
            return issue
    return None


class StaticKnownIssueLookup(KnownIssueLookup):
    """Known-issue feed backed by a dict of asset id -> issues."""

    def __init__(self, issues_by_asset: Optional[Dict[str, List[EquipmentIssue]]] = None):
        self._issues: Dict[str, List[EquipmentIssue]] = {
            asset_id: list(issues) for asset_id, issues in (issues_by_asset or {}).items()
        }

    def add_issue(self, asset_id: str, issue: EquipmentIssue) -> None:
        self._issues.setdefault(asset_id, []).append(issue)
        logger.info(f"Registered known issue for {asset_id}: {issue.equipment_name}")

    async def find_issue(self, asset_id: str, equipment_name: str) -> Optional[EquipmentIssue]:
        issues = self._issues.get(asset_id)
        if not issues:
            return None
        return match_equipment_issue(issues, equipment_name)

"""Deep merge of plugin config keys into a user's config document.

The merge is a pure function over JSON-like values: mappings are merged
recursively, and on every other conflict the existing (user) value wins.
Lists are atomic.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from bundle_kit.models.config import ConfigDocument


def merge(existing: ConfigDocument | None, incoming: ConfigDocument) -> ConfigDocument:
    """Merge incoming keys into existing with user-wins conflict rules.

    Args:
        existing: Current document, or None on first install
        incoming: Plugin-provided keys

    Returns:
        New document; neither input is mutated. Existing keys keep their
        order and new keys are appended in incoming order.
    """
    if existing is None:
        return copy.deepcopy(dict(incoming))
    return _merge_mappings(existing, incoming)


def _merge_mappings(existing: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    result = copy.deepcopy(dict(existing))
    for key, incoming_value in incoming.items():
        if key not in existing:
            result[key] = copy.deepcopy(incoming_value)
            continue

        existing_value = existing[key]
        if isinstance(existing_value, Mapping) and isinstance(incoming_value, Mapping):
            result[key] = _merge_mappings(existing_value, incoming_value)
        # Any other conflict: the copied existing value stays.
    return result


@dataclass(frozen=True)
class MergeReport:
    """Key paths affected by a merge, as dotted strings."""

    added: list[str] = field(default_factory=list)
    kept: list[str] = field(default_factory=list)


def merge_report(existing: ConfigDocument | None, incoming: ConfigDocument) -> MergeReport:
    """Describe what merge(existing, incoming) would do.

    Returns:
        MergeReport where `added` lists paths the plugin introduces and `kept`
        lists paths where the user's differing value shadows the plugin's
    """
    report = MergeReport()
    _walk_report(existing or {}, incoming, (), report)
    return report


def _walk_report(
    existing: Mapping[str, Any],
    incoming: Mapping[str, Any],
    prefix: tuple[str, ...],
    report: MergeReport,
) -> None:
    for key, incoming_value in incoming.items():
        path = (*prefix, key)
        if key not in existing:
            report.added.append(".".join(path))
            continue

        existing_value = existing[key]
        if isinstance(existing_value, Mapping) and isinstance(incoming_value, Mapping):
            _walk_report(existing_value, incoming_value, path, report)
        elif existing_value != incoming_value:
            report.kept.append(".".join(path))

"""Symptom-driven adjustment of predicted period starts.

Some logged symptoms tend to show up just before a period.  When they appear
in the user's history, every predicted period start is pulled a little
earlier.  Only the highest-priority matching symptom counts; adjustments are
never summed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from src.cycle.config_loader import DEFAULT_SYMPTOM_RULES, SymptomAdjustmentRule


@dataclass(frozen=True)
class SymptomLogEntry:
    """A single historical mood/symptom record.  Only the label is used."""

    label: str

    @property
    def normalized(self) -> str:
        """Case-folded label.  Whitespace is significant: " bloating" is a different label."""
        return self.label.lower()

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "SymptomLogEntry":
        """Build from ``{"label": ...}`` or the mood journal shape ``{"mood": ...}``."""
        label = d.get("label", d.get("mood"))
        if label is None:
            raise KeyError("symptom log entry needs a 'label' or 'mood' key")
        return SymptomLogEntry(label=str(label))


def symptom_adjustment_days(
    entries: Iterable[SymptomLogEntry | str],
    rules: Iterable[SymptomAdjustmentRule] | None = None,
) -> int:
    """Return how many days earlier to predict each period start.

    Args:
        entries: Logged symptoms, in any order.  Plain strings are accepted
                 as labels.
        rules:   Ordered adjustment rules; the first rule whose label appears
                 in ``entries`` wins.  Defaults to tender breasts (2 days)
                 then bloating (1 day).

    Returns:
        The adjustment of the first matching rule, or 0.
    """
    present = {
        (e.normalized if isinstance(e, SymptomLogEntry) else e.lower())
        for e in entries
    }
    if rules is None:
        rules = DEFAULT_SYMPTOM_RULES
    for rule in rules:
        if rule.label.lower() in present:
            return rule.days
    return 0

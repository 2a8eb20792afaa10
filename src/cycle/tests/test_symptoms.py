"""Tests for the symptom adjustment heuristic."""

from __future__ import annotations

import pytest

from src.cycle.config_loader import SymptomAdjustmentRule
from src.cycle.symptoms import SymptomLogEntry, symptom_adjustment_days


def entries(*labels: str) -> list[SymptomLogEntry]:
    return [SymptomLogEntry(label=label) for label in labels]


class TestSymptomAdjustment:
    def test_no_symptoms(self) -> None:
        assert symptom_adjustment_days([]) == 0

    def test_unrecognized_symptoms_ignored(self) -> None:
        assert symptom_adjustment_days(entries("cramps", "happy", "headache")) == 0

    def test_tender_breasts(self) -> None:
        assert symptom_adjustment_days(entries("tender breasts")) == 2

    def test_bloating(self) -> None:
        assert symptom_adjustment_days(entries("bloating")) == 1

    def test_both_symptoms_do_not_add_up(self) -> None:
        assert symptom_adjustment_days(entries("bloating", "tender breasts")) == 2

    def test_order_of_log_irrelevant(self) -> None:
        assert symptom_adjustment_days(entries("tender breasts", "bloating")) == 2

    @pytest.mark.parametrize("label", ["Tender Breasts", "TENDER BREASTS", "tender BREASTS"])
    def test_case_insensitive(self, label: str) -> None:
        assert symptom_adjustment_days(entries(label)) == 2

    @pytest.mark.parametrize("label", ["  tender breasts ", "bloating\n", " Bloating"])
    def test_surrounding_whitespace_is_significant(self, label: str) -> None:
        assert symptom_adjustment_days(entries(label)) == 0
        assert symptom_adjustment_days([label]) == 0

    def test_rule_labels_matched_case_insensitively(self) -> None:
        rules = [SymptomAdjustmentRule(label="Tender Breasts", days=2)]
        assert symptom_adjustment_days(entries("tender breasts"), rules) == 2

    def test_repeated_entries_count_once(self) -> None:
        assert symptom_adjustment_days(entries("bloating", "bloating", "bloating")) == 1

    def test_plain_string_labels(self) -> None:
        assert symptom_adjustment_days(["Bloating", "sad"]) == 1

    def test_partial_label_does_not_match(self) -> None:
        assert symptom_adjustment_days(entries("tender", "bloat")) == 0

    def test_custom_rules_first_match_wins(self) -> None:
        rules = [
            SymptomAdjustmentRule(label="acne", days=3),
            SymptomAdjustmentRule(label="bloating", days=1),
        ]
        assert symptom_adjustment_days(entries("bloating", "acne"), rules) == 3
        assert symptom_adjustment_days(entries("tender breasts"), rules) == 0


class TestSymptomLogEntry:
    def test_from_label_dict(self) -> None:
        assert SymptomLogEntry.from_dict({"label": "bloating"}).label == "bloating"

    def test_from_mood_journal_dict(self) -> None:
        entry = SymptomLogEntry.from_dict({"mood": "Tender Breasts", "date": "2024-01-02"})
        assert entry.normalized == "tender breasts"

    def test_missing_label_raises(self) -> None:
        with pytest.raises(KeyError):
            SymptomLogEntry.from_dict({"note": "tired"})

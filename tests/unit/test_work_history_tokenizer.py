from __future__ import annotations

import pytest

from plate_ingest.excel.work_history import tokenize_work_history
from plate_ingest.models.work_history import WorkHistoryEntry


def test_structured_entries_split_on_comma_and_semicolon():
    entries = tokenize_work_history("A: -4961_061, B: -100; C:X-1")
    assert entries == [
        WorkHistoryEntry("A", "-4961_061", "A: -4961_061"),
        WorkHistoryEntry("B", "-100", "B: -100"),
        WorkHistoryEntry("C", "X-1", "C:X-1"),
    ]


def test_unstructured_segment_is_kept_without_project_code():
    entries = tokenize_work_history("A: -100, reworked 2019")
    assert entries[1] == WorkHistoryEntry(None, "reworked 2019", "reworked 2019")


@pytest.mark.parametrize("text", [None, "", "   ", ",;, ;"])
def test_blank_input_yields_no_entries(text):
    assert tokenize_work_history(text) == []


def test_lowercase_letter_is_not_a_project_code():
    entries = tokenize_work_history("a: -100")
    assert entries[0].project_code is None
    assert entries[0].work_order == "a: -100"


def test_entry_to_dict_uses_document_keys():
    entry = tokenize_work_history("B: -100b")[0]
    assert entry.to_dict() == {"projectCode": "B", "workOrder": "-100b", "fullEntry": "B: -100b"}

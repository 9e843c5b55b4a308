"""Tests for the member fingerprint used by the risk cache."""

from __future__ import annotations

from tickrisk.returns import ReturnSeries
from tickrisk.risk.fingerprint import fingerprint_members
from tickrisk.risk.types import MemberRecord


def _records() -> list[MemberRecord]:
    return [
        MemberRecord(ReturnSeries.from_ticks("a", [(10, 20), (20, 30)]), 30.0),
        MemberRecord(ReturnSeries.from_ticks("b", [(10, 11), (11, 12)]), 20.0),
    ]


class TestFingerprintMembers:
    def test_stable_for_equal_content(self) -> None:
        assert fingerprint_members(_records()) == fingerprint_members(_records())

    def test_weight_does_not_affect_digest(self) -> None:
        records = _records()
        before = fingerprint_members(records)
        records[0].weight = 0.6

        assert fingerprint_members(records) == before

    def test_changes_with_value(self) -> None:
        records = _records()
        before = fingerprint_members(records)
        records[1].value = 21.0

        assert fingerprint_members(records) != before

    def test_changes_with_returns(self) -> None:
        records = _records()
        before = fingerprint_members(records)
        records[0].series.push(30, 33, defer_average=True)

        assert fingerprint_members(records) != before

    def test_changes_with_average(self) -> None:
        records = _records()
        records[0].series.push(30, 33, defer_average=True)
        before = fingerprint_members(records)
        records[0].series.recompute_average()

        assert fingerprint_members(records) != before

    def test_changes_with_order(self) -> None:
        records = _records()

        assert fingerprint_members(records) != fingerprint_members(list(reversed(records)))

    def test_empty(self) -> None:
        assert isinstance(fingerprint_members([]), str)

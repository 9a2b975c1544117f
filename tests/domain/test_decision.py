"""Tests for the Decision lattice."""

from __future__ import annotations

import pytest

from pkgboundaries.domain.decision import Decision


class TestDecision:
    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            (Decision.ALLOW, Decision.ALLOW, Decision.ALLOW),
            (Decision.ALLOW, Decision.DENY, Decision.DENY),
            (Decision.DENY, Decision.ALLOW, Decision.DENY),
            (Decision.DENY, Decision.DENY, Decision.DENY),
        ],
    )
    def test_and(self, left: Decision, right: Decision, expected: Decision) -> None:
        assert (left & right) is expected

    def test_in_place_and(self) -> None:
        d = Decision.ALLOW
        d &= Decision.DENY
        d &= Decision.ALLOW
        assert d is Decision.DENY

    def test_values(self) -> None:
        assert Decision.ALLOW.value == "allow"
        assert Decision.DENY == "deny"

    def test_allowed(self) -> None:
        assert Decision.ALLOW.allowed
        assert not Decision.DENY.allowed

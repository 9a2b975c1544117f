"""Tests for output mode dispatch."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from pkgboundaries.output.formatters import OutputSettings, format_result
from pkgboundaries.services.result import ServiceResult


@pytest.fixture
def result() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="decide",
        data={"layer": "App", "identifier": "json", "decision": "deny"},
        warnings=["Layer 'X' is not declared"],
    )


class TestFormatResult:
    def test_json(self, result: ServiceResult) -> None:
        payload = json.loads(format_result(result, json_output=True))
        assert payload["ok"] is True
        assert payload["op"] == "decide"
        assert payload["data"]["decision"] == "deny"
        assert payload["warnings"] == ["Layer 'X' is not declared"]

    def test_json_wins_over_quiet(self, result: ServiceResult) -> None:
        out = format_result(result, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(out)["op"] == "decide"

    def test_quiet(self, result: ServiceResult) -> None:
        assert format_result(result, settings=OutputSettings(quiet=True)) == "deny"

    def test_human_default(self, result: ServiceResult) -> None:
        out = format_result(result)
        assert out.startswith("OK  decide")
        assert "\x1b[" not in out


class TestOutputSettings:
    def test_defaults(self) -> None:
        settings = OutputSettings()
        assert not settings.json_output
        assert not settings.quiet
        assert not settings.verbose

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            OutputSettings().quiet = True  # type: ignore[misc]

"""Tests for CheckService — import boundary analysis over a source tree."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from pkgboundaries.infrastructure.policy_file import load_policy
from pkgboundaries.plugins import hookimpl
from pkgboundaries.plugins.builtins.skip_tests import SkipTestsPlugin
from pkgboundaries.plugins.manager import PluginManager
from pkgboundaries.services.check import CheckService, violation_message


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    @hookimpl
    def post_check(self, violations_found: int, units_checked: int) -> None:
        self.calls.append({"violations_found": violations_found, "units_checked": units_checked})


class _Exploding:
    @hookimpl
    def post_check(self, violations_found: int, units_checked: int) -> None:
        raise RuntimeError("boom")


class _SkipDomain:
    @hookimpl
    def skip_unit(self, module: str, path: str, is_test: bool) -> bool | None:
        return True if module.startswith("myapp.domain") else None


def _service(project_root: Path, *plugins: object) -> CheckService:
    pm: PluginManager | None = None
    if plugins:
        pm = PluginManager()
        for plugin in plugins:
            pm.register_plugin(plugin)
    return CheckService(load_policy(project_root / "pkgboundaries.json"), plugins=pm)


def _lines(violations: list[dict[str, Any]]) -> list[tuple[str, int, str]]:
    return [(Path(v["path"]).name, v["line"], v["identifier"]) for v in violations]


class TestViolationMessage:
    def test_format(self) -> None:
        assert violation_message("fmt", "App") == '"fmt" cannot be imported by App'


class TestCheckService:
    def test_reports_denied_imports(self, project_root: Path) -> None:
        result = _service(project_root).check([project_root])
        assert result.ok
        assert result.op == "check"
        assert _lines(result.data["violations"]) == [
            ("test_views.py", 1, "json"),
            ("views.py", 1, "base64"),
            ("views.py", 2, "json"),
            ("views.py", 4, "pprint"),
            ("models.py", 3, "myapp.app"),
        ]
        assert result.data["count"] == 5

    def test_violation_payload(self, project_root: Path) -> None:
        result = _service(project_root).check([project_root / "src" / "myapp" / "domain"])
        assert result.data["violations"] == [
            {
                "path": str((project_root / "src/myapp/domain/models.py").resolve()),
                "line": 3,
                "column": 0,
                "module": "myapp.domain.models",
                "layer": "Domain",
                "identifier": "myapp.app",
                "message": '"myapp.app" cannot be imported by Domain',
            }
        ]

    def test_unit_counts(self, project_root: Path) -> None:
        data = _service(project_root).check([project_root]).data
        assert data["units_checked"] == 5
        assert data["units_skipped"] == 0
        assert data["units_unclassified"] == 3

    def test_unclassified_units_are_silent(self, project_root: Path) -> None:
        result = _service(project_root).check([project_root / "src" / "myapp" / "infra"])
        assert result.data["count"] == 0
        assert result.data["units_unclassified"] == 2

    def test_skip_tests_plugin(self, project_root: Path) -> None:
        result = _service(project_root, SkipTestsPlugin()).check([project_root])
        assert result.data["count"] == 4
        assert result.data["units_skipped"] == 1
        assert all("test_views" not in v["path"] for v in result.data["violations"])

    def test_disabled_skip_tests_plugin_abstains(self, project_root: Path) -> None:
        result = _service(project_root, SkipTestsPlugin(enabled=False)).check([project_root])
        assert result.data["count"] == 5

    def test_custom_skip_plugin(self, project_root: Path) -> None:
        result = _service(project_root, _SkipDomain()).check([project_root])
        assert result.data["units_skipped"] == 2
        assert "models.py" not in {Path(v["path"]).name for v in result.data["violations"]}

    def test_post_check_notification(self, project_root: Path) -> None:
        recorder = _Recorder()
        _service(project_root, recorder).check([project_root])
        assert recorder.calls == [{"violations_found": 5, "units_checked": 5}]

    def test_plugin_failure_becomes_warning(self, project_root: Path) -> None:
        result = _service(project_root, _Exploding()).check([project_root])
        assert result.ok
        assert "Plugin hook post_check failed" in result.warnings

    def test_unparsable_file_is_skipped(self, project_root: Path) -> None:
        broken = project_root / "src" / "myapp" / "app" / "broken.py"
        broken.write_text("def (:\n", encoding="utf-8")
        result = _service(project_root).check([project_root])
        assert result.ok
        assert result.data["count"] == 5
        assert any(w.startswith(f"Skipped {broken.resolve()}") for w in result.warnings)

    def test_unclassified_broken_file_is_not_parsed(self, project_root: Path) -> None:
        (project_root / "src" / "myapp" / "infra" / "broken.py").write_text("def (:\n")
        result = _service(project_root).check([project_root])
        assert result.warnings == []

    def test_pattern_errors_become_warnings(
        self, project_root: Path, project_policy: dict[str, Any]
    ) -> None:
        project_policy["Layers"].append({"Name": "Bad", "PackageNamePatterns": ["(x"]})
        (project_root / "pkgboundaries.json").write_text(json.dumps(project_policy))
        result = _service(project_root).check([project_root])
        assert result.ok
        assert any(w.startswith("Layer 'Bad' matches nothing") for w in result.warnings)

    @pytest.mark.parametrize("exclude", [["app"], ["myapp"]])
    def test_exclude(self, project_root: Path, exclude: list[str]) -> None:
        result = _service(project_root).check([project_root], exclude=exclude)
        assert "views.py" not in {Path(v["path"]).name for v in result.data["violations"]}

    def test_meta_records_paths_and_duration(self, project_root: Path) -> None:
        src = project_root / "src"
        result = _service(project_root).check(iter([src]))
        assert result.meta is not None
        assert result.meta["paths"] == [str(src)]
        assert result.meta["duration_ms"] >= 0

    def test_tests_dir_scanned_directly_is_skipped(self, project_root: Path) -> None:
        (project_root / "tests").mkdir()
        (project_root / "tests" / "helpers.py").write_text("import json\n")
        result = _service(project_root, SkipTestsPlugin()).check(
            [project_root / "src", project_root / "tests"],
            project_root=project_root,
        )
        assert result.data["units_skipped"] == 2

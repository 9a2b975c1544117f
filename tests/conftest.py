"""Shared pytest fixtures and test helpers for pkgboundaries tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from pkgboundaries.domain.layers import Layer, Rule
from pkgboundaries.domain.patterns import PackagePatternSet
from pkgboundaries.domain.policy import Policy
from pkgboundaries.domain.sets import OrderedSet

# The policy used by the sample project below.
PROJECT_POLICY: dict[str, Any] = {
    "Layers": [
        {"Name": "App", "PackageNames": ["myapp.app"]},
        {"Name": "Domain", "PackageNamePatterns": [r"^myapp\.domain(\.|$)"]},
        {"Name": "Print", "PackageNames": ["pprint", "logging"]},
        {"Name": "Encoding", "PackageNamePatterns": ["^json", "^base64$"]},
    ],
    "Rules": [
        {"Layer": "App", "Allowed": ["Domain"], "Denied": ["Print", "Encoding"]},
        {"Layer": "Domain", "Denied": ["App"]},
    ],
}

# Policy over slash-separated import paths, as other ecosystems spell them.
PATH_STYLE_CONFIG: dict[str, Any] = {
    "Layers": [
        {"Name": "App", "PackageNames": ["github.com/aereal/a"]},
        {"Name": "Errors", "PackageNames": ["errors"]},
        {"Name": "Print", "PackageNames": ["fmt", "log"]},
        {"Name": "Encoding", "PackageNamePatterns": ["^encoding/"]},
    ],
    "Rules": [
        {"Layer": "App", "Allowed": ["Errors"], "Denied": ["Print", "Encoding"]},
    ],
}

_PROJECT_FILES: dict[str, str] = {
    "pyproject.toml": '[project]\nname = "myapp"\n',
    "src/myapp/__init__.py": "",
    "src/myapp/app/__init__.py": "",
    "src/myapp/app/views.py": (
        "import base64\n"
        "import json\n"
        "import os\n"
        "from pprint import pformat\n"
        "\n"
        "from myapp.domain import models\n"
    ),
    "src/myapp/app/test_views.py": "import json\n",
    "src/myapp/domain/__init__.py": "",
    "src/myapp/domain/models.py": "import dataclasses\n\nfrom ..app import views\n",
    "src/myapp/infra/__init__.py": "",
    "src/myapp/infra/db.py": "import json\nimport logging\n",
}


def literal_layer(name: str, *packages: str) -> Layer:
    return Layer(name, package_names=OrderedSet(packages))


def pattern_layer(name: str, *patterns: str) -> Layer:
    return Layer(name, package_name_patterns=PackagePatternSet(patterns))


def write_project(root: Path, policy: dict[str, Any] | None = None) -> Path:
    """Write the sample project (and its policy file) under *root*."""
    for rel, content in _PROJECT_FILES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    (root / "pkgboundaries.json").write_text(
        json.dumps(policy if policy is not None else PROJECT_POLICY, indent=2),
        encoding="utf-8",
    )
    return root


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def abc_policy() -> Policy:
    """Three literal layers and one rule: ``a`` may use ``b``."""
    return Policy(
        layers=[
            literal_layer("a", "pkg/1", "pkg/2"),
            literal_layer("b", "pkg/3", "pkg/4"),
            literal_layer("c", "pkg/5", "pkg/6"),
        ],
        rules=[Rule("a", allowed=("b",))],
    )


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project with sources under ``src/`` and a policy file."""
    return write_project(tmp_path)


@pytest.fixture
def _isolated_project(
    project_root: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Run the CLI from inside the sample project.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    for var in ("PKGBOUNDARIES_PYPROJECT", "PKGBOUNDARIES_POLICY_FILE", "PKGBOUNDARIES_SKIP_TESTS"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(project_root)


@pytest.fixture
def project_policy() -> dict[str, Any]:
    """The sample project's policy document as a dict."""
    return json.loads(json.dumps(PROJECT_POLICY))


@pytest.fixture
def path_style_config() -> dict[str, Any]:
    return json.loads(json.dumps(PATH_STYLE_CONFIG))


@pytest.fixture
def policy_file(tmp_path: Path) -> Callable[[Any], Path]:
    """Factory writing a policy document (dict or raw text) to a temp file."""

    def _write(content: Any, name: str = "policy.json") -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the root handler installed by each CLI invocation."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkb = logging.getLogger("pkgboundaries")
    pkb_level = pkb.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkb.setLevel(pkb_level)

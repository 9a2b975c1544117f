"""Python source discovery and import extraction.

A *unit* is one ``.py`` file. Its identifier for layer classification is
its package: the module itself for ``__init__.py`` and top-level modules,
otherwise the module's parent package.

Each file's import root is found by walking up from its directory while
directories carry an ``__init__.py``, so ``src/myapp/domain/models.py``
is named ``myapp.domain.models`` whichever directory the scan started from.
"""

from __future__ import annotations

import ast
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

# Directories to skip when discovering source files.
DEFAULT_EXCLUDE: tuple[str, ...] = (
    ".git",
    ".hg",
    ".venv",
    "venv",
    "__pycache__",
    ".tox",
    ".nox",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    "build",
    "dist",
    "node_modules",
)

_TEST_DIRS = frozenset({"tests", "test"})


@dataclass(frozen=True)
class ImportEdge:
    """One imported identifier and where it was imported."""

    identifier: str
    path: Path
    line: int
    column: int


@dataclass(frozen=True)
class SourceUnit:
    """One Python file under an import root."""

    path: Path
    module: str
    package: str
    is_test: bool

    def read_imports(self) -> list[ImportEdge]:
        """Parse the file and return its imports in source order.

        Raises:
            SyntaxError: if the file is not valid Python.
            OSError: if the file cannot be read.
        """
        source = self.path.read_text(encoding="utf-8")
        return extract_imports(source, path=self.path, package=self.package)


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def find_import_root(path: Path) -> Path:
    """Return the first ancestor of *path* that is not itself a package."""
    current = path if path.is_dir() else path.parent
    while (current / "__init__.py").is_file():
        parent = current.parent
        if parent == current:
            break
        current = parent
    return current


def module_name_for(path: Path, root: Path) -> str:
    """Dotted module name of *path* relative to the import *root*.

    Examples:
        >>> module_name_for(Path("src/app/core.py"), Path("src"))
        'app.core'
        >>> module_name_for(Path("src/app/__init__.py"), Path("src"))
        'app'
    """
    parts = list(path.relative_to(root).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def package_name_for(path: Path, module: str) -> str:
    """The package a unit belongs to (see module docstring)."""
    if path.name == "__init__.py" or "." not in module:
        return module
    return module.rsplit(".", 1)[0]


def is_test_path(path: Path) -> bool:
    name = path.name
    if name == "conftest.py" or name.startswith("test_") or name.endswith("_test.py"):
        return True
    return any(part in _TEST_DIRS for part in path.parent.parts)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def _iter_python_files(base: Path, exclude: frozenset[str]) -> Iterator[Path]:
    if base.is_file():
        if base.suffix == ".py":
            yield base
        return
    for path in sorted(base.rglob("*.py")):
        rel_parts = path.relative_to(base).parts[:-1]
        if any(part in exclude for part in rel_parts):
            continue
        yield path


def _test_detection_path(path: Path, scan_dir: Path, project_root: Path | None) -> Path:
    """The part of *path* whose directories decide whether it is a test.

    Relative to the project root when *path* lies inside it; otherwise the
    scanned directory's own name is kept, so scanning ``tests/`` directly
    still marks its files.
    """
    if project_root is not None and path.is_relative_to(project_root):
        return path.relative_to(project_root)
    return path.relative_to(scan_dir.parent)


def iter_units(
    paths: Iterable[Path],
    *,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
    project_root: Path | None = None,
) -> Iterator[SourceUnit]:
    """Yield every Python unit under *paths*, each file at most once."""
    excluded = frozenset(exclude)
    root = project_root.resolve() if project_root is not None else None
    seen: set[Path] = set()
    roots: dict[Path, Path] = {}
    for base in paths:
        base = base.resolve()
        scan_dir = base if base.is_dir() else base.parent
        for path in _iter_python_files(base, excluded):
            if path in seen:
                continue
            seen.add(path)
            if path.parent not in roots:
                roots[path.parent] = find_import_root(path.parent)
            module = module_name_for(path, roots[path.parent])
            yield SourceUnit(
                path=path,
                module=module,
                package=package_name_for(path, module),
                is_test=is_test_path(_test_detection_path(path, scan_dir, root)),
            )


# ---------------------------------------------------------------------------
# Import extraction
# ---------------------------------------------------------------------------


def resolve_relative(module: str | None, level: int, package: str) -> str:
    """Resolve a ``from`` import against the importing unit's *package*.

    Examples:
        >>> resolve_relative("models", 1, "app.domain")
        'app.domain.models'
        >>> resolve_relative(None, 2, "app.domain")
        'app'
    """
    if level == 0:
        return module or ""
    base = package.split(".") if package else []
    if level > 1:
        base = base[: len(base) - (level - 1)] if level - 1 <= len(base) else []
    if module:
        base.append(module)
    return ".".join(base)


def extract_imports(source: str, *, path: Path, package: str) -> list[ImportEdge]:
    """Return every import of *source* as :class:`ImportEdge` objects.

    ``import a.b`` yields ``a.b``; ``from a.b import c`` yields ``a.b``.
    Imports nested in functions or ``if TYPE_CHECKING:`` blocks count too.
    """
    tree = ast.parse(source, filename=str(path))
    edges: list[ImportEdge] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                edges.append(ImportEdge(alias.name, path, node.lineno, node.col_offset))
        elif isinstance(node, ast.ImportFrom):
            identifier = resolve_relative(node.module, node.level, package)
            if identifier:
                edges.append(ImportEdge(identifier, path, node.lineno, node.col_offset))
    edges.sort(key=lambda e: (e.line, e.column))
    return edges

"""Read the ``[tool.nmr_splitting]`` tables of a ``pyproject.toml``.

Only the ``session`` and ``logging`` tables are understood.  Both are
optional; a missing table comes back empty so callers can index it directly.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping as ABCMapping
from pathlib import Path
from typing import Any, Dict, Tuple

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

__all__ = ["CONFIG_FILENAME", "CONFIG_TABLES", "load_project_config", "resolve_pyproject_path"]

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "pyproject.toml"
CONFIG_TABLES = ("session", "logging")

ProjectConfig = Dict[str, Dict[str, Any]]


def resolve_pyproject_path(candidate: Path) -> Path | None:
    """Map a directory, or an explicit ``pyproject.toml``, onto the file to read.

    Any other file name is rejected with ``None``.
    """

    candidate = candidate.expanduser()
    if candidate.name == CONFIG_FILENAME:
        return candidate
    return None if candidate.suffix else candidate / CONFIG_FILENAME


def _project_tables(document: ABCMapping[str, Any], source: Path) -> ProjectConfig | None:
    tool = document.get("tool")
    section = tool.get("nmr_splitting") if isinstance(tool, ABCMapping) else None
    if not isinstance(section, ABCMapping):
        return None

    tables: ProjectConfig = {}
    for name in CONFIG_TABLES:
        table = section.get(name, {})
        if not isinstance(table, ABCMapping):
            raise ValueError(f"[tool.nmr_splitting.{name}] in {source} must be a table")
        tables[name] = dict(table)

    unknown = sorted(set(section) - set(CONFIG_TABLES))
    if unknown:
        logger.warning(
            "Ignoring unknown configuration tables.",
            extra={"event": "config.unknown_tables", "tables": unknown, "path": str(source)},
        )
    return tables


def load_project_config(path: Path) -> Tuple[ProjectConfig, Path] | None:
    """Return the ``session``/``logging`` tables found at ``path`` and the file read.

    ``None`` means there is no ``pyproject.toml`` there or it has no
    ``[tool.nmr_splitting]`` section.  A section whose tables are not TOML
    tables raises :class:`ValueError`, as does malformed TOML.
    """

    pyproject_path = resolve_pyproject_path(path)
    if pyproject_path is None or not pyproject_path.is_file():
        return None

    resolved = pyproject_path.resolve(strict=False)
    with resolved.open("rb") as handle:
        document = tomllib.load(handle)

    tables = _project_tables(document, resolved)
    if tables is None:
        return None
    return tables, resolved

"""Configuration loading for the nmr-splitting CLI."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from nmr_splitting.cli.errors import CliError
from nmr_splitting.configuration import load_project_config, resolve_pyproject_path

__all__ = ["CONFIG_ENV_VAR", "load_cli_config"]

CONFIG_ENV_VAR = "NMR_SPLITTING_CONFIG"


def _iter_unique_paths(candidates: List[Path]) -> List[Path]:
    seen: Dict[Path, None] = {}
    ordered: List[Path] = []
    for candidate in candidates:
        resolved = candidate.expanduser().resolve(strict=False)
        if resolved in seen:
            continue
        seen[resolved] = None
        ordered.append(resolved)
    return ordered


def load_cli_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load CLI defaults from ``pyproject.toml``.

    Candidates are, in order: ``path``, the ``NMR_SPLITTING_CONFIG``
    environment variable and the current working directory.  An explicit
    ``path`` that does not exist is a usage error.
    """

    if path is not None:
        explicit = resolve_pyproject_path(Path(path))
        if explicit is None or not explicit.expanduser().exists():
            raise CliError(
                f"Configuration file not found: {path}",
                category="not_found",
                context={"path": str(path)},
            )

    bases: List[Path] = []
    if path is not None:
        bases.append(Path(path))
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        bases.append(Path(env_config))
    bases.append(Path.cwd())

    candidates = [candidate for base in bases if (candidate := resolve_pyproject_path(base)) is not None]
    for candidate in _iter_unique_paths(candidates):
        try:
            loaded = load_project_config(candidate)
        except (OSError, ValueError) as exc:
            raise CliError(
                f"Unable to read configuration from {candidate}: {exc}",
                category="io",
                context={"path": str(candidate)},
            ) from exc
        if not loaded:
            continue
        payload, resolved = loaded
        payload["_config_path"] = str(resolved)
        return payload

    return {"_config_path": None}

"""Bundled splitter presets loaded from ``data/presets.toml``."""

from __future__ import annotations

from collections.abc import Mapping as ABCMapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Tuple

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

from nmr_splitting.core.peak import Splitter
from nmr_splitting.data import PRESETS_RESOURCE

__all__ = ["DEFAULT_PRESET", "load_presets", "get_preset", "preset_names"]

DEFAULT_PRESET = "Et₂O (CH₂)"

Preset = Tuple[Splitter, ...]


def _parse_splitter(entry: Any, preset: str) -> Splitter:
    if not isinstance(entry, ABCMapping):
        raise ValueError(f"Preset {preset!r} contains a malformed splitter: {entry!r}")
    try:
        return Splitter(n=int(entry["n"]), j=float(entry["j"]))
    except KeyError as exc:
        raise ValueError(f"Preset {preset!r} splitter is missing {exc.args[0]!r}") from None


def _parse_presets(payload: Mapping[str, Any]) -> Mapping[str, Preset]:
    presets: dict[str, Preset] = {}
    entries = payload.get("presets", [])
    if not isinstance(entries, list):
        raise ValueError("The 'presets' table must be an array of tables")
    for entry in entries:
        if not isinstance(entry, ABCMapping) or "name" not in entry:
            raise ValueError(f"Malformed preset entry: {entry!r}")
        name = str(entry["name"])
        splitters = entry.get("splitters", [])
        presets[name] = tuple(_parse_splitter(item, name) for item in splitters)
    return MappingProxyType(presets)


@lru_cache(maxsize=1)
def _bundled_presets() -> Mapping[str, Preset]:
    with PRESETS_RESOURCE.open("rb") as handle:
        return _parse_presets(tomllib.load(handle))


def load_presets(path: Path | None = None) -> Mapping[str, Preset]:
    """Return an immutable mapping of preset name to splitters.

    When ``path`` is omitted the presets bundled with the package are used.
    """

    if path is None:
        return _bundled_presets()
    with Path(path).expanduser().open("rb") as handle:
        return _parse_presets(tomllib.load(handle))


def get_preset(name: str, presets: Mapping[str, Preset] | None = None) -> Preset:
    catalogue = presets if presets is not None else load_presets()
    try:
        return catalogue[name]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}") from None


def preset_names(presets: Mapping[str, Preset] | None = None) -> Tuple[str, ...]:
    catalogue = presets if presets is not None else load_presets()
    return tuple(sorted(catalogue))

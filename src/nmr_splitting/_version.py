"""Package version, from the installed metadata or the checkout's ``pyproject.toml``."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

from packaging.version import InvalidVersion, Version

DISTRIBUTION = "nmr-splitting"

# src/nmr_splitting/_version.py -> repository root
_CHECKOUT_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _declared_version(pyproject: Path = _CHECKOUT_PYPROJECT) -> str:
    """Read ``[project] version`` when running from an uninstalled checkout."""

    try:
        with pyproject.open("rb") as handle:
            return str(tomllib.load(handle)["project"]["version"])
    except (OSError, KeyError, tomllib.TOMLDecodeError) as exc:
        raise RuntimeError(
            f"{DISTRIBUTION} is not installed and {pyproject} declares no version"
        ) from exc


def checked_version(raw: str) -> str:
    """Return ``raw`` if it is a ``MAJOR.MINOR.PATCH`` version."""

    try:
        release = Version(raw).release
    except InvalidVersion as exc:
        raise RuntimeError(f"{DISTRIBUTION} has an invalid version {raw!r}") from exc
    if len(release) != 3:
        raise RuntimeError(f"{DISTRIBUTION} version {raw!r} is not MAJOR.MINOR.PATCH")
    return raw


def _installed_or_declared() -> str:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return _declared_version()


__version__ = checked_version(_installed_or_declared())

__all__ = ["__version__"]

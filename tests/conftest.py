from __future__ import annotations

import logging
import sys
from pathlib import Path
from textwrap import dedent

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from nmr_splitting.core.peak import Peak, Splitter  # noqa: E402


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


@pytest.fixture()
def triplet_peak() -> Peak:
    return Peak(splitters=[Splitter(n=2, j=6.0)], fwhm=1.0)


@pytest.fixture()
def doublet_of_triplets() -> Peak:
    return Peak(splitters=[Splitter(n=1, j=8.0), Splitter(n=2, j=2.0)], fwhm=0.5)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by ``setup_logging`` between tests."""

    yield
    logger = logging.getLogger("nmr_splitting")
    for handler in list(logger.handlers):
        if getattr(handler, "_nmr_splitting_handler", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty directory so the repository ``pyproject.toml`` is not picked up."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NMR_SPLITTING_CONFIG", raising=False)
    return tmp_path

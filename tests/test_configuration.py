from __future__ import annotations

from pathlib import Path

import logging

import pytest

from nmr_splitting.configuration import load_project_config, resolve_pyproject_path
from nmr_splitting.settings import SessionSettings
from tests.conftest import write_pyproject


def test_resolve_pyproject_path(tmp_path: Path) -> None:
    assert resolve_pyproject_path(tmp_path) == tmp_path / "pyproject.toml"
    assert resolve_pyproject_path(tmp_path / "pyproject.toml") == tmp_path / "pyproject.toml"
    assert resolve_pyproject_path(tmp_path / "settings.json") is None


def test_load_project_config_reads_tool_section(tmp_path: Path) -> None:
    write_pyproject(
        tmp_path,
        """
        [project]
        name = "demo"

        [tool.nmr_splitting.session]
        field_strength = 400
        distribution = "lorentzian"

        [tool.nmr_splitting.logging]
        level = "debug"
        """,
    )

    loaded = load_project_config(tmp_path)

    assert loaded is not None
    payload, path = loaded
    assert path == (tmp_path / "pyproject.toml").resolve()
    assert payload["session"]["field_strength"] == 400
    assert payload["logging"] == {"level": "debug"}


def test_load_project_config_without_section(tmp_path: Path) -> None:
    write_pyproject(tmp_path, "[project]\nname = 'demo'\n")

    assert load_project_config(tmp_path) is None
    assert load_project_config(tmp_path / "missing") is None


def test_load_project_config_fills_missing_tables(tmp_path: Path) -> None:
    write_pyproject(tmp_path, "[tool.nmr_splitting.session]\nfwhm = 2.0\n")

    payload, _ = load_project_config(tmp_path)

    assert payload == {"session": {"fwhm": 2.0}, "logging": {}}


def test_load_project_config_rejects_scalar_table(tmp_path: Path) -> None:
    write_pyproject(tmp_path, "[tool.nmr_splitting]\nsession = \"fast\"\n")

    with pytest.raises(ValueError, match="nmr_splitting.session"):
        load_project_config(tmp_path)


def test_load_project_config_ignores_unknown_tables(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    write_pyproject(
        tmp_path,
        """
        [tool.nmr_splitting.plotting]
        theme = "dark"

        [tool.nmr_splitting.logging]
        format = "text"
        """,
    )

    with caplog.at_level(logging.WARNING, logger="nmr_splitting"):
        payload, _ = load_project_config(tmp_path)

    assert set(payload) == {"session", "logging"}
    records = [r for r in caplog.records if getattr(r, "event", None) == "config.unknown_tables"]
    assert records and records[0].tables == ["plotting"]


def test_session_settings_defaults() -> None:
    settings = SessionSettings.from_config(None)

    assert settings == SessionSettings()
    assert settings.field_strength == 600.0
    assert settings.distribution == "gaussian"
    assert settings.as_dict()["preset"] == "Et₂O (CH₂)"


def test_session_settings_from_config() -> None:
    settings = SessionSettings.from_config(
        {
            "session": {
                "field_strength": "300",
                "fwhm": 2,
                "distribution": " Lorentzian ",
                "preset": "Isopropyl (CH)",
                "samples": 200,
                "max_splitters": 6,
            }
        }
    )

    assert settings.field_strength == 300.0
    assert settings.fwhm == 2.0
    assert settings.distribution == "lorentzian"
    assert settings.preset == "Isopropyl (CH)"
    assert settings.samples == 200
    assert settings.max_splitters == 6


@pytest.mark.parametrize(
    "section",
    [
        {"field_strength": "fast"},
        {"field_strength": -10},
        {"fwhm": float("nan")},
        {"distribution": "voigt"},
        {"preset": ""},
        {"samples": 1},
        {"max_proton_count": True},
    ],
)
def test_session_settings_invalid_values_fall_back(section) -> None:
    assert SessionSettings.from_config({"session": section}) == SessionSettings()

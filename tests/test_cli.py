from __future__ import annotations

import csv
import io
import json
from pathlib import Path

import pytest

from nmr_splitting.cli import run_cli
from nmr_splitting.cli.io import CONFIG_ENV_VAR, load_cli_config
from nmr_splitting.cli.errors import CliError
from tests.conftest import write_pyproject


pytestmark = pytest.mark.usefixtures("isolated_cwd")


def _run_json(args: list[str], capsys: pytest.CaptureFixture[str]) -> dict:
    run_cli([*args, "--export", "json"])
    return json.loads(capsys.readouterr().out)


def test_describe_default_preset_markdown(capsys: pytest.CaptureFixture[str]) -> None:
    result = run_cli(["describe"])

    out = capsys.readouterr().out
    assert out.rstrip("\n") == result
    assert out.startswith("## Multiplet cascade")
    assert "- **pattern**: q" in out
    assert "| stage | splitter |" in out


def test_describe_explicit_splitters(capsys: pytest.CaptureFixture[str]) -> None:
    payload = _run_json(["describe", "--splitter", "1:10", "--splitter", "2:3", "--fwhm", "0.5"], capsys)

    assert payload["summary"]["pattern"] == "dt"
    assert payload["summary"]["total_peaklets"] == 6
    assert [row["peaklets"] for row in payload["rows"]] == [1, 2, 6]
    assert all(row["total_integration"] == pytest.approx(1.0) for row in payload["rows"])
    assert [p["delta_hz"] for p in payload["stages"][1]] == pytest.approx([-5.0, 5.0])


def test_describe_preset_with_extra_splitter(capsys: pytest.CaptureFixture[str]) -> None:
    payload = _run_json(["describe", "--preset", "Et₂O (CH₃)", "--splitter", "1:2"], capsys)

    assert payload["summary"]["pattern"] == "td"
    assert payload["summary"]["splitters"] == 2


def test_waveform_csv(capsys: pytest.CaptureFixture[str]) -> None:
    run_cli(["waveform", "--splitter", "1:7", "--samples", "5", "--extent-fwhm", "2"])

    rows = list(csv.DictReader(io.StringIO(capsys.readouterr().out)))
    assert len(rows) == 5
    assert list(rows[0]) == ["x_ppm", "intensity", "integral"]
    integrals = [float(row["integral"]) for row in rows]
    assert integrals == sorted(integrals)
    assert float(rows[2]["x_ppm"]) == pytest.approx(0.0, abs=1e-12)


def test_waveform_partial_stage(capsys: pytest.CaptureFixture[str]) -> None:
    payload = _run_json(
        ["waveform", "--splitter", "3:7", "--stage", "0.5", "--samples", "11", "--distribution", "lorentzian"],
        capsys,
    )

    assert payload["summary"]["stage"] == 0.5
    assert payload["summary"]["components"] == 4
    assert payload["summary"]["distribution"] == "lorentzian"
    assert len(payload["rows"]) == 11
    assert payload["sparkline"]


def test_diagram_json(capsys: pytest.CaptureFixture[str]) -> None:
    payload = _run_json(["diagram", "--splitter", "1:8", "--splitter", "2:2", "--stage", "1"], capsys)

    stages = payload["diagram"]["stages"]
    assert [stage["enabled"] for stage in stages] == [True, False]
    assert len(payload["rows"]) == 2 + 6


def test_presets_listing(capsys: pytest.CaptureFixture[str]) -> None:
    run_cli(["presets"])

    out = capsys.readouterr().out
    assert "Vinyl acetate (CH=)" in out
    assert "| Isopropyl (CH) | <complex> | 6:6.9 |" in out


def test_multiple_exports(capsys: pytest.CaptureFixture[str]) -> None:
    run_cli(["presets", "--export", "json", "--export", "csv"])

    out = capsys.readouterr().out
    json_part, csv_part = out.split("\n\n", 1)
    assert json.loads(json_part)["title"] == "Presets"
    assert csv_part.startswith("name,pattern,splitters")


def test_unknown_preset_exits_with_not_found(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_cli(["describe", "--preset", "Benzene"])

    assert excinfo.value.code == 4
    captured = capsys.readouterr()
    assert "Unknown preset 'Benzene'" in captured.out
    assert '"event": "cli.error"' in captured.err


@pytest.mark.parametrize(
    "args",
    [
        ["waveform", "--splitter", "1:5", "--stage", "1.5"],
        ["waveform", "--samples", "1"],
        ["describe", "--field-strength", "0"],
        ["describe", "--fwhm", "-1"],
    ],
)
def test_usage_errors(args: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_cli(args)

    assert excinfo.value.code == 2


def test_malformed_splitter_is_rejected_by_parser() -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_cli(["describe", "--splitter", "three"])

    assert excinfo.value.code == 2


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_cli(["--config", str(tmp_path / "nowhere" / "pyproject.toml"), "presets"])

    assert excinfo.value.code == 4


def test_project_config_sets_defaults(isolated_cwd: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_pyproject(
        isolated_cwd,
        """
        [tool.nmr_splitting.session]
        preset = "Isopropyl (CH)"
        fwhm = 2.5
        field_strength = 300
        """,
    )

    payload = _run_json(["describe"], capsys)

    assert payload["summary"]["pattern"] == "<complex>"
    assert payload["summary"]["fwhm_hz"] == 2.5
    assert payload["summary"]["field_strength_mhz"] == 300.0


def test_config_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    write_pyproject(config_dir, '[tool.nmr_splitting.session]\npreset = "Et₂O (CH₃)"\n')
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_dir))

    payload = _run_json(["describe"], capsys)

    assert payload["summary"]["pattern"] == "t"


def test_too_complex_pattern_is_logged(capsys: pytest.CaptureFixture[str]) -> None:
    run_cli(["describe", "--splitter", "9:3", "--splitter", "9:1", "--splitter", "1:7", "--export", "json"])

    captured = capsys.readouterr()
    assert json.loads(captured.out)["summary"]["too_complex"] is True
    assert '"event": "cli.too_complex"' in captured.err


def test_log_level_override(capsys: pytest.CaptureFixture[str]) -> None:
    run_cli(["--log-level", "error", "describe", "--splitter", "9:3", "--splitter", "9:1", "--splitter", "1:7"])

    assert "cli.too_complex" not in capsys.readouterr().err


def test_load_cli_config_without_files(isolated_cwd: Path) -> None:
    assert load_cli_config() == {"_config_path": None}


def test_load_cli_config_reports_invalid_toml(isolated_cwd: Path) -> None:
    (isolated_cwd / "pyproject.toml").write_text("[tool.nmr_splitting\n", encoding="utf-8")

    with pytest.raises(CliError) as excinfo:
        load_cli_config()

    assert excinfo.value.category == "io"
    assert excinfo.value.status_code == 3


@pytest.mark.parametrize(
    "args, pyproject",
    [
        (["--log-level", "verbose", "presets"], None),
        (["presets"], '[tool.nmr_splitting.logging]\nlevel = "chatty"\n'),
    ],
)
def test_unknown_log_level_is_a_usage_error(
    isolated_cwd: Path, capsys: pytest.CaptureFixture[str], args: list[str], pyproject: str | None
) -> None:
    if pyproject is not None:
        write_pyproject(isolated_cwd, pyproject)

    with pytest.raises(SystemExit) as excinfo:
        run_cli(args)

    assert excinfo.value.code == 2
    assert "Unknown logging level" in capsys.readouterr().out

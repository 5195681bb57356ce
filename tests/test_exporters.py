from __future__ import annotations

import csv
import io
import json
import math
from dataclasses import dataclass

import numpy as np
import pytest

from nmr_splitting.exporters import (
    csv_exporter,
    exporters_registry,
    json_exporter,
    markdown_exporter,
)


@dataclass(frozen=True)
class _Point:
    x: float
    y: float


PAYLOAD = {
    "title": "Multiplet cascade",
    "summary": {"pattern": "dd", "too_complex": False, "fwhm_hz": 0.5},
    "rows": [
        {"stage": 0, "peaklets": 1, "resolved": True},
        {"stage": 1, "peaklets": 2, "resolved": False},
    ],
}


def test_registry_names() -> None:
    assert set(exporters_registry) == {"json", "csv", "markdown"}


def test_json_exporter_normalises_values() -> None:
    rendered = json_exporter(
        {
            "array": np.array([1.0, 2.0]),
            "scalar": np.float64(0.5),
            "point": _Point(1.0, 2.0),
            "nan": math.nan,
            "tuple": (1, 2),
        }
    )

    payload = json.loads(rendered)
    assert payload == {
        "array": [1.0, 2.0],
        "nan": None,
        "point": {"x": 1.0, "y": 2.0},
        "scalar": 0.5,
        "tuple": [1, 2],
    }


def test_csv_exporter_writes_rows() -> None:
    rendered = csv_exporter(PAYLOAD)

    rows = list(csv.DictReader(io.StringIO(rendered)))
    assert [row["stage"] for row in rows] == ["0", "1"]
    assert rows[1]["resolved"] == "False"


def test_csv_exporter_merges_columns() -> None:
    rendered = csv_exporter({"rows": [{"a": 1}, {"b": 2}]})

    assert rendered.splitlines() == ["a,b", "1,", ",2"]


def test_markdown_exporter_layout() -> None:
    rendered = markdown_exporter({**PAYLOAD, "sparkline": "▁▄█▄▁"})

    lines = rendered.splitlines()
    assert lines[0] == "## Multiplet cascade"
    assert "- **pattern**: dd" in lines
    assert "- **too_complex**: no" in lines
    assert "▁▄█▄▁" in lines
    assert "| stage | peaklets | resolved |" in lines
    assert "| 1 | 2 | no |" in lines


def test_rows_must_be_mappings() -> None:
    with pytest.raises(TypeError):
        csv_exporter({"rows": "not rows"})
    with pytest.raises(TypeError):
        markdown_exporter({"rows": [1, 2]})

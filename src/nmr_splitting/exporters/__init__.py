"""Exporter registry for nmr_splitting command outputs.

Every command produces a payload mapping.  Exporters understand two optional
keys besides the free-form content: ``summary`` (a flat mapping rendered as
key/value pairs) and ``rows`` (a list of flat mappings rendered as a table).
"""

from __future__ import annotations

import csv
import json
import math
from dataclasses import asdict, is_dataclass
from io import StringIO
from typing import Any, Dict, List, Mapping, Protocol, Sequence

import numpy as np

__all__ = [
    "Exporter",
    "json_exporter",
    "csv_exporter",
    "markdown_exporter",
    "exporters_registry",
]


class Exporter(Protocol):
    """Exporter callable protocol."""

    def __call__(self, results: Mapping[str, Any]) -> str:  # pragma: no cover - interface only
        ...


def _normalise(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return _normalise(asdict(value))
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (list, tuple)):
        return [_normalise(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _normalise(item) for key, item in value.items()}
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _rows(results: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    rows = results.get("rows", [])
    if not isinstance(rows, Sequence) or isinstance(rows, (str, bytes)):
        raise TypeError("The 'rows' entry must be a sequence of mappings")
    normalised = [_normalise(row) for row in rows]
    for row in normalised:
        if not isinstance(row, Mapping):
            raise TypeError("The 'rows' entry must be a sequence of mappings")
    return normalised


def _columns(rows: Sequence[Mapping[str, Any]]) -> List[str]:
    columns: Dict[str, None] = {}
    for row in rows:
        for key in row:
            columns.setdefault(str(key), None)
    return list(columns)


def _format_cell(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.6g}"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if value is None:
        return ""
    return str(value)


def json_exporter(results: Mapping[str, Any]) -> str:
    payload = _normalise(results)
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)


def csv_exporter(results: Mapping[str, Any]) -> str:
    rows = _rows(results)
    buffer = StringIO()
    columns = _columns(rows)
    writer = csv.DictWriter(buffer, fieldnames=columns, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({column: row.get(column, "") for column in columns})
    return buffer.getvalue()


def markdown_exporter(results: Mapping[str, Any]) -> str:
    lines: List[str] = []
    title = results.get("title")
    if title:
        lines.append(f"## {title}")
        lines.append("")

    summary = results.get("summary")
    if isinstance(summary, Mapping) and summary:
        for key, value in _normalise(summary).items():
            lines.append(f"- **{key}**: {_format_cell(value)}")
        lines.append("")

    sparkline = results.get("sparkline")
    if isinstance(sparkline, str) and sparkline:
        lines.append("```")
        lines.append(sparkline)
        lines.append("```")
        lines.append("")

    rows = _rows(results)
    if rows:
        columns = _columns(rows)
        lines.append("| " + " | ".join(columns) + " |")
        lines.append("| " + " | ".join("---" for _ in columns) + " |")
        for row in rows:
            lines.append("| " + " | ".join(_format_cell(row.get(column)) for column in columns) + " |")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


exporters_registry: Dict[str, Exporter] = {
    "json": json_exporter,
    "csv": csv_exporter,
    "markdown": markdown_exporter,
}

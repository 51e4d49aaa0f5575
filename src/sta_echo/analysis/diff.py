#!/usr/bin/env python3
#
# Copyright 2020-2022 F4PGA Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""Compare two echo dumps and report differences.

This is a text level comparison for regression testing. Records are
matched by their non-numeric fields, and numeric fields (``constraint``,
``arr``, ``req``) are compared with an absolute tolerance.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from sta_echo.io.echo import GRAPH_SECTION

NUMERIC_FIELDS: frozenset[str] = frozenset({"constraint", "arr", "req"})

_FIELD_RE = re.compile(r"(\w+): (\S+)")
_RECORD_RE = re.compile(r"(?:\w+: \S+(?: |$))+")
# Clock names are quoted but not escaped, and always end the record.
_NAME_RE = re.compile(r' name: (".*")$')
_HEADER_RE = re.compile(r"(\w+):")


@dataclass
class ValueDiff:
    """A numeric field that differs between two echo dumps.

    Attributes
    ----------
    section : str
        The section name, e.g. ``"analysis_result"``.
    key : str
        The record's non-numeric fields, e.g.
        ``"type: SETUP_DATA node: 3 domain: 0"``.
    field : str
        The numeric field name, e.g. ``"arr"``.
    value_a : float | None
        The value in the first dump, or None if the field is missing.
    value_b : float | None
        The value in the second dump, or None if the field is missing.
    delta : float | None
        ``value_b - value_a`` when both are finite numbers, else None.
    """

    section: str
    key: str
    field: str
    value_a: float | None
    value_b: float | None
    delta: float | None


@dataclass
class EchoDiff:
    """Complete comparison result between two echo dumps.

    Attributes
    ----------
    sections_only_in_a : list[str]
        Sections present only in the first dump.
    sections_only_in_b : list[str]
        Sections present only in the second dump.
    only_in_a : list[tuple[str, str]]
        Records present only in the first dump, as ``(section, key)``.
    only_in_b : list[tuple[str, str]]
        Records present only in the second dump, as ``(section, key)``.
    value_diffs : list[ValueDiff]
        Numeric differences beyond tolerance for records present in both.
    """

    sections_only_in_a: list[str] = field(default_factory=list)
    sections_only_in_b: list[str] = field(default_factory=list)
    only_in_a: list[tuple[str, str]] = field(default_factory=list)
    only_in_b: list[tuple[str, str]] = field(default_factory=list)
    value_diffs: list[ValueDiff] = field(default_factory=list)

    @property
    def is_identical(self) -> bool:
        return not (
            self.sections_only_in_a
            or self.sections_only_in_b
            or self.only_in_a
            or self.only_in_b
            or self.value_diffs
        )


def split_sections(text: str) -> dict[str, list[tuple[int, str]]]:
    """Split echo text into its sections.

    Parameters
    ----------
    text : str
        The echo text.

    Returns
    -------
    dict[str, list[tuple[int, str]]]
        Body lines of each section, keyed by section name, as
        ``(line_number, line)`` pairs. Blank lines are dropped.

    Raises
    ------
    ValueError
        If a body line appears before the first section header.

    Examples
    --------
    >>> sections = split_sections("analysis_result:\\n type: X node: 0\\n\\n")
    >>> sections["analysis_result"]
    [(2, ' type: X node: 0')]
    """
    sections: dict[str, list[tuple[int, str]]] = {}
    current: list[tuple[int, str]] | None = None

    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        if not line[0].isspace():
            header = _HEADER_RE.fullmatch(line.rstrip())
            if header is None:
                msg = f"Line {lineno}: expected a section header, got {line!r}"
                raise ValueError(msg)
            current = sections.setdefault(header.group(1), [])
            continue
        if current is None:
            msg = f"Line {lineno}: record before any section header"
            raise ValueError(msg)
        current.append((lineno, line))

    return sections


def _graph_records(lines: list[tuple[int, str]]) -> dict[str, dict[str, float]]:
    """Key graph lines by their enclosing node or edge block."""
    records: dict[str, dict[str, float]] = {}
    block: str | None = None
    for lineno, line in lines:
        if line.startswith("  "):
            if block is None:
                msg = f"Line {lineno}: graph attribute outside a node or edge block"
                raise ValueError(msg)
            records[f"{block} {line.strip()}"] = {}
        else:
            block = line.strip()
            records[block] = {}
    return records


def _parse_number(text: str, lineno: int) -> float:
    try:
        return float(text)
    except ValueError:
        msg = f"Line {lineno}: invalid number {text!r}"
        raise ValueError(msg) from None


def _field_records(lines: list[tuple[int, str]]) -> dict[str, dict[str, float]]:
    """Key record lines by their non-numeric fields."""
    records: dict[str, dict[str, float]] = {}
    for lineno, line in lines:
        body = line.strip()
        fields = body
        quoted_name = _NAME_RE.search(body)
        if quoted_name is not None:
            fields = body[: quoted_name.start()]
        if _RECORD_RE.fullmatch(fields) is None:
            msg = f"Line {lineno}: cannot parse record {body!r}"
            raise ValueError(msg)

        key_parts: list[str] = []
        values: dict[str, float] = {}
        for name, value in _FIELD_RE.findall(fields):
            if name in NUMERIC_FIELDS:
                values[name] = _parse_number(value, lineno)
            else:
                key_parts.append(f"{name}: {value}")
        if quoted_name is not None:
            key_parts.append(f"name: {quoted_name.group(1)}")

        key = " ".join(key_parts)
        # Repeated keys are told apart by occurrence.
        occurrence = 1
        unique_key = key
        while unique_key in records:
            occurrence += 1
            unique_key = f"{key} #{occurrence}"
        records[unique_key] = values
    return records


def _compare_numbers(
    section: str,
    key: str,
    values_a: dict[str, float],
    values_b: dict[str, float],
    tolerance: float,
) -> list[ValueDiff]:
    diffs: list[ValueDiff] = []
    for name in sorted(values_a.keys() | values_b.keys()):
        val_a = values_a.get(name)
        val_b = values_b.get(name)

        delta: float | None = None
        if val_a is not None and val_b is not None:
            if math.isnan(val_a) and math.isnan(val_b):
                continue
            if val_a == val_b:
                continue
            if math.isfinite(val_a) and math.isfinite(val_b):
                delta = val_b - val_a
                if abs(delta) <= tolerance:
                    continue

        diffs.append(
            ValueDiff(
                section=section,
                key=key,
                field=name,
                value_a=val_a,
                value_b=val_b,
                delta=delta,
            ),
        )
    return diffs


def diff_echo(a: str, b: str, tolerance: float = 1e-9) -> EchoDiff:
    """Compare two echo dumps and return a structured diff result.

    Parameters
    ----------
    a : str
        The first (reference) echo text.
    b : str
        The second (comparison) echo text.
    tolerance : float, optional
        Absolute tolerance for numeric field comparison, by default 1e-9.

    Returns
    -------
    EchoDiff
        Sections and records present in only one dump, and numeric
        differences for records present in both.

    Raises
    ------
    ValueError
        If either text contains a line that cannot be classified.

    Examples
    --------
    >>> a = "analysis_result:\\n type: SETUP_DATA node: 1 domain: 0 arr: 1 req: 4\\n"
    >>> b = "analysis_result:\\n type: SETUP_DATA node: 1 domain: 0 arr: 1.5 req: 4\\n"
    >>> result = diff_echo(a, b)
    >>> result.value_diffs[0].field, result.value_diffs[0].delta
    ('arr', 0.5)
    """
    sections_a = split_sections(a)
    sections_b = split_sections(b)

    result = EchoDiff()
    result.sections_only_in_a = sorted(sections_a.keys() - sections_b.keys())
    result.sections_only_in_b = sorted(sections_b.keys() - sections_a.keys())

    for section in sections_a:
        if section not in sections_b:
            continue
        parse = _graph_records if section == GRAPH_SECTION else _field_records
        records_a = parse(sections_a[section])
        records_b = parse(sections_b[section])

        result.only_in_a.extend(
            (section, key) for key in records_a if key not in records_b
        )
        result.only_in_b.extend(
            (section, key) for key in records_b if key not in records_a
        )
        for key, values_a in records_a.items():
            if key in records_b:
                result.value_diffs.extend(
                    _compare_numbers(section, key, values_a, records_b[key], tolerance)
                )

    return result

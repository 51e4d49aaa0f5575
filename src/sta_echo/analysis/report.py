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


"""Render echo comparison results as human-readable text."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from sta_echo.analysis.diff import EchoDiff


def _format_value(value: float | None) -> str:
    """Format a float value for display, or return 'N/A' if None."""
    if value is None:
        return "N/A"
    return f"{value:g}"


def render_diff(result: EchoDiff, width: int = 120) -> str:
    """Render an echo diff as plain-text tables.

    Parameters
    ----------
    result : EchoDiff
        The comparison result to render.
    width : int
        Console width used for table layout.

    Returns
    -------
    str
        The formatted report. Only non-empty tables are included.
    """
    buf = StringIO()
    console = Console(file=buf, force_terminal=False, width=width)

    if result.is_identical:
        console.print("No differences")
        return buf.getvalue()

    if result.sections_only_in_a or result.sections_only_in_b:
        sections_table = Table(title="Missing Sections")
        sections_table.add_column("Section")
        sections_table.add_column("Present In")
        for section in result.sections_only_in_a:
            sections_table.add_row(section, "A")
        for section in result.sections_only_in_b:
            sections_table.add_row(section, "B")
        console.print(sections_table)

    for title, records in (
        ("Only In A", result.only_in_a),
        ("Only In B", result.only_in_b),
    ):
        if not records:
            continue
        records_table = Table(title=title)
        records_table.add_column("Section")
        records_table.add_column("Record")
        for section, key in records:
            records_table.add_row(section, key)
        console.print(records_table)

    if result.value_diffs:
        values_table = Table(title="Value Differences")
        values_table.add_column("Section")
        values_table.add_column("Record")
        values_table.add_column("Field")
        values_table.add_column("A")
        values_table.add_column("B")
        values_table.add_column("Delta")
        for entry in result.value_diffs:
            values_table.add_row(
                entry.section,
                entry.key,
                entry.field,
                _format_value(entry.value_a),
                _format_value(entry.value_b),
                _format_value(entry.delta),
            )
        console.print(values_table)

    return buf.getvalue()

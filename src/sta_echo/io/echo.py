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


"""Write timing graphs, constraints and analysis results as echo text.

The echo format is line oriented and deterministic so that dumps taken
from different runs can be compared with an ordinary text diff. Sections
are written as::

    timing_graph:
     node: 0
      type: SOURCE
      ...

    timing_constraints:
     type: CLOCK domain: 0 name: "clk"
     ...

    analysis_result:
     type: SETUP_DATA node: 1 domain: 0 arr: 1.5 req: 4
     ...

Constraint lines are written in the iteration order of the constraint
collections. :class:`~sta_echo.core.model.TimingConstraints` iterates in
insertion order; other collections are only as deterministic as their own
iteration order.
"""

from __future__ import annotations

import logging
import math
from enum import StrEnum
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING

from sta_echo.core.utils import format_float, is_unset
from sta_echo.io.options import DEFAULT_OPTIONS, EchoOptions

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from sta_echo.core.ids import NodeId
    from sta_echo.core.model import DomainPair, IoConstraint, TimingTag
    from sta_echo.core.protocols import (
        AnalyzerReader,
        ConstraintsReader,
        GraphReader,
        TagViewReader,
        TextSink,
    )

logger = logging.getLogger(__name__)

GRAPH_SECTION = "timing_graph"
CONSTRAINTS_SECTION = "timing_constraints"
RESULT_SECTION = "analysis_result"


class ConstraintType(StrEnum):
    """Record types of the ``timing_constraints`` section, in output order."""

    CLOCK = "CLOCK"
    CLOCK_SOURCE = "CLOCK_SOURCE"
    CONSTANT_GENERATOR = "CONSTANT_GENERATOR"
    INPUT_CONSTRAINT = "INPUT_CONSTRAINT"
    OUTPUT_CONSTRAINT = "OUTPUT_CONSTRAINT"
    SETUP_CONSTRAINT = "SETUP_CONSTRAINT"
    HOLD_CONSTRAINT = "HOLD_CONSTRAINT"


class TagType(StrEnum):
    """Record types of the ``analysis_result`` section, in output order."""

    SETUP_DATA = "SETUP_DATA"
    SETUP_CLOCK = "SETUP_CLOCK"
    HOLD_DATA = "HOLD_DATA"
    HOLD_CLOCK = "HOLD_CLOCK"


def _format_ids(ids: Iterable[object]) -> str:
    # Adjacency order is arbitrary; ids are always written ascending.
    return " ".join(str(i) for i in sorted(ids))


def write_timing_graph(sink: TextSink, graph: GraphReader) -> None:
    """Write the ``timing_graph`` section.

    Nodes are written in ascending id order, followed by edges in ascending
    id order. Each node's in-edge and out-edge ids are sorted ascending.

    Parameters
    ----------
    sink : TextSink
        Destination of the text.
    graph : GraphReader
        The timing graph to write.
    """
    sink.write(f"{GRAPH_SECTION}:\n")

    nodes = sorted(graph.nodes())
    for node in nodes:
        sink.write(f" node: {node}\n")
        sink.write(f"  type: {graph.node_type(node)}\n")
        sink.write(f"  in_edges: {_format_ids(graph.node_in_edges(node))}\n")
        sink.write(f"  out_edges: {_format_ids(graph.node_out_edges(node))}\n")

    edges = sorted(graph.edges())
    for edge in edges:
        sink.write(f" edge: {edge}\n")
        sink.write(f"  src_node: {graph.edge_src_node(edge)}\n")
        sink.write(f"  sink_node: {graph.edge_sink_node(edge)}\n")

    sink.write("\n")
    logger.debug("Wrote timing graph: %d nodes, %d edges", len(nodes), len(edges))


def _write_io_constraints(
    sink: TextSink,
    constraint_type: ConstraintType,
    entries: Iterable[IoConstraint],
    precision: int,
) -> int:
    """Write one line per set node constraint, returning the number skipped."""
    skipped = 0
    for entry in entries:
        if is_unset(entry.constraint):
            skipped += 1
            continue
        sink.write(
            f" type: {constraint_type} node: {entry.node} domain: {entry.domain}"
            f" constraint: {format_float(entry.constraint, precision)}\n"
        )
    return skipped


def _write_domain_pair_constraints(
    sink: TextSink,
    constraint_type: ConstraintType,
    entries: Mapping[DomainPair, float | None],
    precision: int,
) -> int:
    """Write one line per set domain pair constraint, returning the number skipped."""
    skipped = 0
    for key, constraint in entries.items():
        if is_unset(constraint):
            skipped += 1
            continue
        sink.write(
            f" type: {constraint_type}"
            f" src_domain: {key.src_domain}"
            f" sink_domain: {key.sink_domain}"
            f" constraint: {format_float(constraint, precision)}\n"
        )
    return skipped


def write_timing_constraints(
    sink: TextSink,
    constraints: ConstraintsReader,
    options: EchoOptions | None = None,
) -> None:
    """Write the ``timing_constraints`` section.

    Records are grouped by type in the order of :class:`ConstraintType`.
    Constraints whose value is unset (None or NaN) produce no line, and
    clock domains without a valid source node produce no ``CLOCK_SOURCE``
    line.

    Parameters
    ----------
    sink : TextSink
        Destination of the text.
    constraints : ConstraintsReader
        The constraints to write.
    options : EchoOptions | None
        Formatting options, by default :data:`DEFAULT_OPTIONS`.
    """
    opts = options or DEFAULT_OPTIONS
    sink.write(f"{CONSTRAINTS_SECTION}:\n")

    domains = list(constraints.clock_domains())
    for domain in domains:
        name = constraints.clock_domain_name(domain)
        sink.write(f' type: {ConstraintType.CLOCK} domain: {domain} name: "{name}"\n')

    for domain in domains:
        source = constraints.clock_domain_source_node(domain)
        if source is None or not source.is_valid:
            continue
        sink.write(
            f" type: {ConstraintType.CLOCK_SOURCE} node: {source} domain: {domain}\n"
        )

    for node in constraints.constant_generators():
        sink.write(f" type: {ConstraintType.CONSTANT_GENERATOR} node: {node}\n")

    skipped = _write_io_constraints(
        sink,
        ConstraintType.INPUT_CONSTRAINT,
        constraints.input_constraints(),
        opts.float_precision,
    )
    skipped += _write_io_constraints(
        sink,
        ConstraintType.OUTPUT_CONSTRAINT,
        constraints.output_constraints(),
        opts.float_precision,
    )
    skipped += _write_domain_pair_constraints(
        sink,
        ConstraintType.SETUP_CONSTRAINT,
        constraints.setup_constraints(),
        opts.float_precision,
    )
    skipped += _write_domain_pair_constraints(
        sink,
        ConstraintType.HOLD_CONSTRAINT,
        constraints.hold_constraints(),
        opts.float_precision,
    )

    sink.write("\n")
    logger.debug(
        "Wrote timing constraints: %d clock domains, %d unset values skipped",
        len(domains),
        skipped,
    )


def write_tags(
    sink: TextSink,
    tag_type: str,
    tags: Iterable[TimingTag],
    node: NodeId,
    options: EchoOptions | None = None,
) -> int:
    """Write one ``analysis_result`` line per tag that has a time set.

    A tag with neither arrival nor required time set produces no line.
    With ``legacy_required_gating`` the ``req:`` field follows the arrival
    time: it is omitted when arrival is unset, and written as ``nan`` when
    arrival is set but required is not.

    Parameters
    ----------
    sink : TextSink
        Destination of the text.
    tag_type : str
        Record type label, e.g. ``TagType.SETUP_DATA``.
    tags : Iterable[TimingTag]
        The node's tags, in the order they should be written.
    node : NodeId
        The node the tags belong to.
    options : EchoOptions | None
        Formatting options, by default :data:`DEFAULT_OPTIONS`.

    Returns
    -------
    int
        The number of lines written.
    """
    opts = options or DEFAULT_OPTIONS
    written = 0
    for tag in tags:
        has_arrival = not is_unset(tag.arrival)
        has_required = not is_unset(tag.required)
        if not (has_arrival or has_required):
            continue
        if opts.legacy_required_gating and not has_arrival:
            continue

        fields = [f"type: {tag_type}", f"node: {node}", f"domain: {tag.domain}"]
        if has_arrival:
            fields.append(f"arr: {format_float(tag.arrival, opts.float_precision)}")
        if has_required or opts.legacy_required_gating:
            required = tag.required if has_required else math.nan
            fields.append(f"req: {format_float(required, opts.float_precision)}")

        sink.write(f" {' '.join(fields)}\n")
        written += 1
    return written


def _write_view(
    sink: TextSink,
    nodes: list[NodeId],
    view: TagViewReader,
    data_type: TagType,
    clock_type: TagType,
    opts: EchoOptions,
) -> int:
    written = 0
    for node in nodes:
        written += write_tags(sink, data_type, view.data_tags(node), node, opts)
    for node in nodes:
        written += write_tags(sink, clock_type, view.clock_tags(node), node, opts)
    return written


def write_analysis_result(
    sink: TextSink,
    graph: GraphReader,
    analyzer: AnalyzerReader,
    options: EchoOptions | None = None,
) -> None:
    """Write the ``analysis_result`` section.

    For a setup view, every node's ``SETUP_DATA`` lines are written in
    ascending node order, then every node's ``SETUP_CLOCK`` lines. A hold
    view follows with ``HOLD_DATA`` and ``HOLD_CLOCK``. A missing view
    writes nothing for its categories.

    Parameters
    ----------
    sink : TextSink
        Destination of the text.
    graph : GraphReader
        The timing graph the tags were computed on.
    analyzer : AnalyzerReader
        The analysis result.
    options : EchoOptions | None
        Formatting options, by default :data:`DEFAULT_OPTIONS`.
    """
    opts = options or DEFAULT_OPTIONS
    setup_view = analyzer.setup_view()
    hold_view = analyzer.hold_view()
    nodes = sorted(graph.nodes())

    sink.write(f"{RESULT_SECTION}:\n")
    written = 0
    if setup_view is not None:
        written += _write_view(
            sink, nodes, setup_view, TagType.SETUP_DATA, TagType.SETUP_CLOCK, opts
        )
    if hold_view is not None:
        written += _write_view(
            sink, nodes, hold_view, TagType.HOLD_DATA, TagType.HOLD_CLOCK, opts
        )
    sink.write("\n")

    logger.debug(
        "Wrote analysis result: setup=%s hold=%s, %d tag lines",
        setup_view is not None,
        hold_view is not None,
        written,
    )


def write_echo(
    sink: TextSink,
    graph: GraphReader,
    constraints: ConstraintsReader,
    analyzer: AnalyzerReader,
    options: EchoOptions | None = None,
) -> None:
    """Write the graph, constraints and result sections in that order."""
    write_timing_graph(sink, graph)
    write_timing_constraints(sink, constraints, options)
    write_analysis_result(sink, graph, analyzer, options)


def echo_to_string(
    graph: GraphReader,
    constraints: ConstraintsReader,
    analyzer: AnalyzerReader,
    options: EchoOptions | None = None,
) -> str:
    """Return the full echo dump as a string."""
    buf = StringIO()
    write_echo(buf, graph, constraints, analyzer, options)
    return buf.getvalue()


def write_echo_file(
    path: str | Path,
    graph: GraphReader,
    constraints: ConstraintsReader,
    analyzer: AnalyzerReader,
    options: EchoOptions | None = None,
) -> None:
    """Write the full echo dump to *path* as UTF-8 with ``\\n`` line endings."""
    with Path(path).open("w", encoding="utf-8", newline="\n") as sink:
        write_echo(sink, graph, constraints, analyzer, options)
    logger.debug("Wrote echo file %s", path)

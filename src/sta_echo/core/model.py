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


"""In-memory timing graph, constraints and analysis results."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

import networkx as nx

from sta_echo.core.ids import DomainId, EdgeId, NodeId
from sta_echo.core.utils import optional_time

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sta_echo.core.protocols import TagViewReader


class NodeType(StrEnum):
    """Common timing graph node labels."""

    SOURCE = "SOURCE"
    SINK = "SINK"
    IPIN = "IPIN"
    OPIN = "OPIN"
    CPIN = "CPIN"


class TimingGraph:
    """Directed timing graph with dense node and edge ids.

    Wraps a ``networkx.MultiDiGraph`` whose nodes are node indices and
    whose edge keys are edge indices, so parallel edges between the same
    pair of nodes stay distinct.
    """

    def __init__(self) -> None:
        self._graph: nx.MultiDiGraph = nx.MultiDiGraph()
        self._edges: list[tuple[NodeId, NodeId]] = []

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Expose the underlying NetworkX MultiDiGraph.

        Returns
        -------
        nx.MultiDiGraph
            The backing graph.
        """
        return self._graph

    @property
    def num_nodes(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def _has_node(self, node: NodeId) -> bool:
        return node.is_valid and node.index < self.num_nodes

    def _has_edge(self, edge: EdgeId) -> bool:
        return edge.is_valid and edge.index < self.num_edges

    def add_node(self, node_type: str) -> NodeId:
        """Append a node and return its id.

        Parameters
        ----------
        node_type : str
            The node's type label, e.g. ``NodeType.SOURCE``.

        Returns
        -------
        NodeId
            The id of the new node, one past the previous largest id.
        """
        node = NodeId(self.num_nodes)
        self._graph.add_node(node.index, node_type=str(node_type))
        return node

    def add_edge(self, src: NodeId, sink: NodeId) -> EdgeId:
        """Append an edge from *src* to *sink* and return its id.

        Raises
        ------
        ValueError
            If either endpoint is not a node of this graph.
        """
        for node in (src, sink):
            if not self._has_node(node):
                msg = f"Cannot add edge to unknown node {node!r}"
                raise ValueError(msg)
        edge = EdgeId(self.num_edges)
        self._graph.add_edge(src.index, sink.index, key=edge.index)
        self._edges.append((src, sink))
        return edge

    def nodes(self) -> list[NodeId]:
        return [NodeId(i) for i in range(self.num_nodes)]

    def edges(self) -> list[EdgeId]:
        return [EdgeId(i) for i in range(self.num_edges)]

    def node_type(self, node: NodeId) -> str:
        if not self._has_node(node):
            raise KeyError(node)
        return self._graph.nodes[node.index]["node_type"]

    def node_in_edges(self, node: NodeId) -> frozenset[EdgeId]:
        """Return the ids of edges ending at *node*, in no particular order."""
        if not self._has_node(node):
            raise KeyError(node)
        return frozenset(
            EdgeId(key) for _u, _v, key in self._graph.in_edges(node.index, keys=True)
        )

    def node_out_edges(self, node: NodeId) -> frozenset[EdgeId]:
        """Return the ids of edges starting at *node*, in no particular order."""
        if not self._has_node(node):
            raise KeyError(node)
        return frozenset(
            EdgeId(key)
            for _u, _v, key in self._graph.out_edges(node.index, keys=True)
        )

    def edge_src_node(self, edge: EdgeId) -> NodeId:
        if not self._has_edge(edge):
            raise KeyError(edge)
        return self._edges[edge.index][0]

    def edge_sink_node(self, edge: EdgeId) -> NodeId:
        if not self._has_edge(edge):
            raise KeyError(edge)
        return self._edges[edge.index][1]


@dataclass(frozen=True)
class ClockDomain:
    """A named clock, optionally anchored to the node that generates it."""

    name: str
    source_node: NodeId = field(default_factory=NodeId.invalid)


@dataclass(frozen=True, order=True)
class DomainPair:
    """Key of a setup or hold constraint between two clock domains."""

    src_domain: DomainId
    sink_domain: DomainId


@dataclass(frozen=True)
class IoConstraint:
    """An input or output delay constraint on one node in one clock domain.

    Attributes
    ----------
    node : NodeId
        The constrained node.
    domain : DomainId
        The clock domain the constraint is relative to.
    constraint : float | None
        The delay value, or None when unset. NaN is stored as None.
    """

    node: NodeId
    domain: DomainId
    constraint: float | None

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraint", optional_time(self.constraint))


class TimingConstraints:
    """Clock domains and the constraints defined relative to them.

    All collections iterate in insertion order. Setting a constraint that
    already exists replaces its value without moving it.
    """

    def __init__(self) -> None:
        self._domains: list[ClockDomain] = []
        self._constant_generators: dict[NodeId, None] = {}
        self._input_constraints: dict[tuple[NodeId, DomainId], float | None] = {}
        self._output_constraints: dict[tuple[NodeId, DomainId], float | None] = {}
        self._setup_constraints: dict[DomainPair, float | None] = {}
        self._hold_constraints: dict[DomainPair, float | None] = {}

    def _check_domain(self, domain: DomainId) -> None:
        if not domain.is_valid or domain.index >= len(self._domains):
            msg = f"Unknown clock domain {domain!r}"
            raise ValueError(msg)

    # ── Clock domains ───────────────────────────────────────────────

    def create_clock_domain(self, name: str) -> DomainId:
        """Create a clock domain, or return the existing one called *name*."""
        existing = self.find_clock_domain(name)
        if existing.is_valid:
            return existing
        self._domains.append(ClockDomain(name=name))
        return DomainId(len(self._domains) - 1)

    def find_clock_domain(self, name: str) -> DomainId:
        """Return the id of the domain called *name*, or the invalid id."""
        for index, domain in enumerate(self._domains):
            if domain.name == name:
                return DomainId(index)
        return DomainId.invalid()

    def set_clock_domain_source(self, domain: DomainId, node: NodeId) -> None:
        self._check_domain(domain)
        self._domains[domain.index] = dataclasses.replace(
            self._domains[domain.index], source_node=node
        )

    def clock_domains(self) -> list[DomainId]:
        return [DomainId(i) for i in range(len(self._domains))]

    def clock_domain_name(self, domain: DomainId) -> str:
        self._check_domain(domain)
        return self._domains[domain.index].name

    def clock_domain_source_node(self, domain: DomainId) -> NodeId:
        self._check_domain(domain)
        return self._domains[domain.index].source_node

    # ── Constant generators ─────────────────────────────────────────

    def set_constant_generator(self, node: NodeId, is_constant: bool = True) -> None:
        if is_constant:
            self._constant_generators[node] = None
        else:
            self._constant_generators.pop(node, None)

    def constant_generators(self) -> list[NodeId]:
        return list(self._constant_generators)

    # ── Node constraints ────────────────────────────────────────────

    def set_input_constraint(
        self, node: NodeId, domain: DomainId, constraint: float | None
    ) -> None:
        self._check_domain(domain)
        self._input_constraints[(node, domain)] = optional_time(constraint)

    def set_output_constraint(
        self, node: NodeId, domain: DomainId, constraint: float | None
    ) -> None:
        self._check_domain(domain)
        self._output_constraints[(node, domain)] = optional_time(constraint)

    def input_constraints(self) -> list[IoConstraint]:
        return [
            IoConstraint(node, domain, value)
            for (node, domain), value in self._input_constraints.items()
        ]

    def output_constraints(self) -> list[IoConstraint]:
        return [
            IoConstraint(node, domain, value)
            for (node, domain), value in self._output_constraints.items()
        ]

    # ── Domain pair constraints ─────────────────────────────────────

    def set_setup_constraint(
        self, src_domain: DomainId, sink_domain: DomainId, constraint: float | None
    ) -> None:
        self._check_domain(src_domain)
        self._check_domain(sink_domain)
        key = DomainPair(src_domain, sink_domain)
        self._setup_constraints[key] = optional_time(constraint)

    def set_hold_constraint(
        self, src_domain: DomainId, sink_domain: DomainId, constraint: float | None
    ) -> None:
        self._check_domain(src_domain)
        self._check_domain(sink_domain)
        key = DomainPair(src_domain, sink_domain)
        self._hold_constraints[key] = optional_time(constraint)

    def setup_constraints(self) -> Mapping[DomainPair, float | None]:
        return MappingProxyType(self._setup_constraints)

    def hold_constraints(self) -> Mapping[DomainPair, float | None]:
        return MappingProxyType(self._hold_constraints)


@dataclass(frozen=True)
class TimingTag:
    """Arrival and required time of one clock domain at a node.

    Either time may be None when it was not computed; NaN is stored as
    None.
    """

    domain: DomainId
    arrival: float | None = None
    required: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "arrival", optional_time(self.arrival))
        object.__setattr__(self, "required", optional_time(self.required))


class TimingTagView:
    """Per-node data and clock tags computed by one kind of analysis."""

    def __init__(self) -> None:
        self._data_tags: dict[NodeId, list[TimingTag]] = {}
        self._clock_tags: dict[NodeId, list[TimingTag]] = {}

    def add_data_tag(self, node: NodeId, tag: TimingTag) -> None:
        self._data_tags.setdefault(node, []).append(tag)

    def add_clock_tag(self, node: NodeId, tag: TimingTag) -> None:
        self._clock_tags.setdefault(node, []).append(tag)

    def data_tags(self, node: NodeId) -> tuple[TimingTag, ...]:
        return tuple(self._data_tags.get(node, ()))

    def clock_tags(self, node: NodeId) -> tuple[TimingTag, ...]:
        return tuple(self._clock_tags.get(node, ()))


@dataclass(frozen=True)
class TimingAnalyzer:
    """Analysis result exposing an optional setup view and hold view.

    Attributes
    ----------
    setup : TagViewReader | None
        Tags from setup (max-delay) analysis, or None if not performed.
    hold : TagViewReader | None
        Tags from hold (min-delay) analysis, or None if not performed.
    """

    setup: TagViewReader | None = None
    hold: TagViewReader | None = None

    def setup_view(self) -> TagViewReader | None:
        return self.setup

    def hold_view(self) -> TagViewReader | None:
        return self.hold

    @property
    def supports_setup(self) -> bool:
        return self.setup is not None

    @property
    def supports_hold(self) -> bool:
        return self.hold is not None

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


"""Programmatic builders for timing graphs and analysis results."""

from __future__ import annotations

from sta_echo.core.ids import DomainId, NodeId
from sta_echo.core.model import (
    TimingAnalyzer,
    TimingGraph,
    TimingTag,
    TimingTagView,
)

# Node and domain arguments can be passed as handles or as plain indices.
NodeInput = NodeId | int
DomainInput = DomainId | int


def _as_node(node: NodeInput) -> NodeId:
    return node if isinstance(node, NodeId) else NodeId(node)


def _as_domain(domain: DomainInput) -> DomainId:
    return domain if isinstance(domain, DomainId) else DomainId(domain)


class TimingGraphBuilder:
    """Fluent builder for :class:`TimingGraph` objects.

    Examples
    --------
    >>> graph = (
    ...     TimingGraphBuilder()
    ...     .add_node("SOURCE")
    ...     .add_node("SINK")
    ...     .add_edge(0, 1)
    ...     .build()
    ... )
    >>> graph.num_nodes, graph.num_edges
    (2, 1)
    """

    def __init__(self) -> None:
        self._graph = TimingGraph()

    def add_node(self, node_type: str) -> TimingGraphBuilder:
        self._graph.add_node(node_type)
        return self

    def add_nodes(self, *node_types: str) -> TimingGraphBuilder:
        for node_type in node_types:
            self._graph.add_node(node_type)
        return self

    def add_edge(self, src: NodeInput, sink: NodeInput) -> TimingGraphBuilder:
        self._graph.add_edge(_as_node(src), _as_node(sink))
        return self

    def build(self) -> TimingGraph:
        return self._graph


class AnalyzerBuilder:
    """Fluent builder for :class:`TimingAnalyzer` objects.

    A capability view exists in the result once it has been enabled, either
    explicitly with :meth:`enable_setup` / :meth:`enable_hold` or implicitly
    by adding a tag to it.

    Examples
    --------
    >>> analyzer = (
    ...     AnalyzerBuilder()
    ...     .add_setup_data_tag(1, 0, arrival=1.5, required=4.0)
    ...     .build()
    ... )
    >>> analyzer.supports_setup, analyzer.supports_hold
    (True, False)
    """

    def __init__(self) -> None:
        self._setup: TimingTagView | None = None
        self._hold: TimingTagView | None = None

    def enable_setup(self) -> AnalyzerBuilder:
        if self._setup is None:
            self._setup = TimingTagView()
        return self

    def enable_hold(self) -> AnalyzerBuilder:
        if self._hold is None:
            self._hold = TimingTagView()
        return self

    def add_setup_data_tag(
        self,
        node: NodeInput,
        domain: DomainInput,
        arrival: float | None = None,
        required: float | None = None,
    ) -> AnalyzerBuilder:
        self.enable_setup()
        self._setup.add_data_tag(
            _as_node(node), TimingTag(_as_domain(domain), arrival, required)
        )
        return self

    def add_setup_clock_tag(
        self,
        node: NodeInput,
        domain: DomainInput,
        arrival: float | None = None,
        required: float | None = None,
    ) -> AnalyzerBuilder:
        self.enable_setup()
        self._setup.add_clock_tag(
            _as_node(node), TimingTag(_as_domain(domain), arrival, required)
        )
        return self

    def add_hold_data_tag(
        self,
        node: NodeInput,
        domain: DomainInput,
        arrival: float | None = None,
        required: float | None = None,
    ) -> AnalyzerBuilder:
        self.enable_hold()
        self._hold.add_data_tag(
            _as_node(node), TimingTag(_as_domain(domain), arrival, required)
        )
        return self

    def add_hold_clock_tag(
        self,
        node: NodeInput,
        domain: DomainInput,
        arrival: float | None = None,
        required: float | None = None,
    ) -> AnalyzerBuilder:
        self.enable_hold()
        self._hold.add_clock_tag(
            _as_node(node), TimingTag(_as_domain(domain), arrival, required)
        )
        return self

    def build(self) -> TimingAnalyzer:
        return TimingAnalyzer(setup=self._setup, hold=self._hold)

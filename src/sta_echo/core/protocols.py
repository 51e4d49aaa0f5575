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


"""Read contracts the echo writers require from the analysis engine.

Any object satisfying these protocols can be written; the containers in
:mod:`sta_echo.core.model` are one implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping, Sequence

    from sta_echo.core.ids import DomainId, EdgeId, NodeId
    from sta_echo.core.model import DomainPair, IoConstraint, TimingTag


@runtime_checkable
class GraphReader(Protocol):
    def nodes(self) -> Sequence[NodeId]: ...

    def edges(self) -> Sequence[EdgeId]: ...

    def node_type(self, node: NodeId) -> str: ...

    def node_in_edges(self, node: NodeId) -> Collection[EdgeId]: ...

    def node_out_edges(self, node: NodeId) -> Collection[EdgeId]: ...

    def edge_src_node(self, edge: EdgeId) -> NodeId: ...

    def edge_sink_node(self, edge: EdgeId) -> NodeId: ...


@runtime_checkable
class ConstraintsReader(Protocol):
    def clock_domains(self) -> Iterable[DomainId]: ...

    def clock_domain_name(self, domain: DomainId) -> str: ...

    def clock_domain_source_node(self, domain: DomainId) -> NodeId: ...

    def constant_generators(self) -> Iterable[NodeId]: ...

    def input_constraints(self) -> Iterable[IoConstraint]: ...

    def output_constraints(self) -> Iterable[IoConstraint]: ...

    def setup_constraints(self) -> Mapping[DomainPair, float | None]: ...

    def hold_constraints(self) -> Mapping[DomainPair, float | None]: ...


@runtime_checkable
class TagViewReader(Protocol):
    def data_tags(self, node: NodeId) -> Sequence[TimingTag]: ...

    def clock_tags(self, node: NodeId) -> Sequence[TimingTag]: ...


@runtime_checkable
class AnalyzerReader(Protocol):
    def setup_view(self) -> TagViewReader | None: ...

    def hold_view(self) -> TagViewReader | None: ...


class TextSink(Protocol):
    """Anything text can be written to, such as an open file or ``StringIO``."""

    def write(self, text: str, /) -> int | None: ...

"""Shared test constants and fixtures."""

from pathlib import Path

import pytest

from sta_echo.core.builder import AnalyzerBuilder, TimingGraphBuilder
from sta_echo.core.ids import NodeId
from sta_echo.core.model import (
    NodeType,
    TimingAnalyzer,
    TimingConstraints,
    TimingGraph,
)

DATA_DIR = (Path(__file__).parent / "data").resolve()


class ReversedAdjacencyGraph:
    """Graph wrapper whose adjacency lists come back in descending order."""

    def __init__(self, graph: TimingGraph) -> None:
        self._graph = graph

    def nodes(self) -> list[NodeId]:
        return self._graph.nodes()

    def edges(self) -> list:
        return self._graph.edges()

    def node_type(self, node: NodeId) -> str:
        return self._graph.node_type(node)

    def node_in_edges(self, node: NodeId) -> list:
        return sorted(self._graph.node_in_edges(node), reverse=True)

    def node_out_edges(self, node: NodeId) -> list:
        return sorted(self._graph.node_out_edges(node), reverse=True)

    def edge_src_node(self, edge):
        return self._graph.edge_src_node(edge)

    def edge_sink_node(self, edge):
        return self._graph.edge_sink_node(edge)


@pytest.fixture
def two_node_graph() -> TimingGraph:
    """A SOURCE node driving a SINK node through edge 0."""
    return (
        TimingGraphBuilder()
        .add_node(NodeType.SOURCE)
        .add_node(NodeType.SINK)
        .add_edge(0, 1)
        .build()
    )


@pytest.fixture
def sample_graph() -> TimingGraph:
    """Data path 0 -> 1 -> 2 clocked from 3 -> 4 -> 2, plus an unconnected node 5."""
    return (
        TimingGraphBuilder()
        .add_nodes(
            NodeType.SOURCE,
            NodeType.IPIN,
            NodeType.SINK,
            NodeType.SOURCE,
            NodeType.CPIN,
            NodeType.SOURCE,
        )
        .add_edge(0, 1)
        .add_edge(1, 2)
        .add_edge(3, 4)
        .add_edge(4, 2)
        .add_edge(0, 2)
        .build()
    )


@pytest.fixture
def sample_constraints() -> TimingConstraints:
    tc = TimingConstraints()
    clk = tc.create_clock_domain("clk")
    io = tc.create_clock_domain("virtual_io")
    tc.set_clock_domain_source(clk, NodeId(3))
    tc.set_constant_generator(NodeId(5))
    tc.set_input_constraint(NodeId(0), io, 0.5)
    tc.set_output_constraint(NodeId(2), io, 1.25)
    tc.set_output_constraint(NodeId(2), clk, None)
    tc.set_setup_constraint(clk, clk, 10.0)
    tc.set_setup_constraint(io, clk, 9.5)
    tc.set_hold_constraint(clk, clk, 0.0)
    tc.set_hold_constraint(io, clk, float("nan"))
    return tc


@pytest.fixture
def sample_analyzer() -> TimingAnalyzer:
    return (
        AnalyzerBuilder()
        .add_setup_data_tag(0, 1, arrival=0.5, required=8.75)
        .add_setup_data_tag(1, 1, arrival=1.5, required=9.0)
        .add_setup_data_tag(2, 1, arrival=2.75, required=9.5)
        .add_setup_data_tag(2, 0, arrival=None, required=10.0)
        .add_setup_clock_tag(3, 0, arrival=0.0)
        .add_setup_clock_tag(4, 0, arrival=0.25)
        .add_hold_data_tag(2, 1, arrival=2.75, required=0.125)
        .add_hold_clock_tag(4, 0, arrival=0.25, required=0.25)
        .build()
    )

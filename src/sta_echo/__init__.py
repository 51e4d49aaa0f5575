"""sta_echo -- deterministic text dumps of static timing analysis data."""

from sta_echo.analysis import (
    EchoDiff,
    ValueDiff,
    diff_echo,
    render_diff,
    split_sections,
)
from sta_echo.core import (
    AnalyzerBuilder,
    ClockDomain,
    DomainId,
    DomainPair,
    EdgeId,
    IoConstraint,
    NodeId,
    NodeType,
    TimingAnalyzer,
    TimingConstraints,
    TimingGraph,
    TimingGraphBuilder,
    TimingTag,
    TimingTagView,
)
from sta_echo.io import (
    EchoOptions,
    echo_to_string,
    write_analysis_result,
    write_echo,
    write_echo_file,
    write_tags,
    write_timing_constraints,
    write_timing_graph,
)

__all__ = [
    # core
    "AnalyzerBuilder",
    "ClockDomain",
    "DomainId",
    "DomainPair",
    "EdgeId",
    "IoConstraint",
    "NodeId",
    "NodeType",
    "TimingAnalyzer",
    "TimingConstraints",
    "TimingGraph",
    "TimingGraphBuilder",
    "TimingTag",
    "TimingTagView",
    # io
    "EchoOptions",
    "echo_to_string",
    "write_analysis_result",
    "write_echo",
    "write_echo_file",
    "write_tags",
    "write_timing_constraints",
    "write_timing_graph",
    # analysis
    "EchoDiff",
    "ValueDiff",
    "diff_echo",
    "render_diff",
    "split_sections",
]

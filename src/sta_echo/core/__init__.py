"""Core data models, read contracts and builders for timing echo output."""

from sta_echo.core.builder import AnalyzerBuilder, TimingGraphBuilder
from sta_echo.core.ids import INVALID_INDEX, DomainId, EdgeId, NodeId
from sta_echo.core.model import (
    ClockDomain,
    DomainPair,
    IoConstraint,
    NodeType,
    TimingAnalyzer,
    TimingConstraints,
    TimingGraph,
    TimingTag,
    TimingTagView,
)
from sta_echo.core.protocols import (
    AnalyzerReader,
    ConstraintsReader,
    GraphReader,
    TagViewReader,
    TextSink,
)
from sta_echo.core.utils import format_float, is_unset, optional_time

__all__ = [
    # ids
    "INVALID_INDEX",
    "DomainId",
    "EdgeId",
    "NodeId",
    # model
    "ClockDomain",
    "DomainPair",
    "IoConstraint",
    "NodeType",
    "TimingAnalyzer",
    "TimingConstraints",
    "TimingGraph",
    "TimingTag",
    "TimingTagView",
    # protocols
    "AnalyzerReader",
    "ConstraintsReader",
    "GraphReader",
    "TagViewReader",
    "TextSink",
    # builder
    "AnalyzerBuilder",
    "TimingGraphBuilder",
    # utils
    "format_float",
    "is_unset",
    "optional_time",
]

"""Writers producing echo text from timing data."""

from sta_echo.io.echo import (
    CONSTRAINTS_SECTION,
    GRAPH_SECTION,
    RESULT_SECTION,
    ConstraintType,
    TagType,
    echo_to_string,
    write_analysis_result,
    write_echo,
    write_echo_file,
    write_tags,
    write_timing_constraints,
    write_timing_graph,
)
from sta_echo.io.options import DEFAULT_OPTIONS, EchoOptions

__all__ = [
    # echo
    "CONSTRAINTS_SECTION",
    "GRAPH_SECTION",
    "RESULT_SECTION",
    "ConstraintType",
    "TagType",
    "echo_to_string",
    "write_analysis_result",
    "write_echo",
    "write_echo_file",
    "write_tags",
    "write_timing_constraints",
    "write_timing_graph",
    # options
    "DEFAULT_OPTIONS",
    "EchoOptions",
]

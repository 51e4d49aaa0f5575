"""Comparison and reporting of echo dumps."""

from sta_echo.analysis.diff import (
    EchoDiff,
    ValueDiff,
    diff_echo,
    split_sections,
)
from sta_echo.analysis.report import render_diff

__all__ = [
    # diff
    "EchoDiff",
    "ValueDiff",
    "diff_echo",
    "split_sections",
    # report
    "render_diff",
]

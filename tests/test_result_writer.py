"""Tests for the analysis_result section and the tag line formatter."""

import math
from io import StringIO

import pytest

from sta_echo.core.builder import AnalyzerBuilder
from sta_echo.core.ids import DomainId, NodeId
from sta_echo.core.model import TimingAnalyzer, TimingGraph, TimingTag
from sta_echo.io.echo import TagType, write_analysis_result, write_tags
from sta_echo.io.options import EchoOptions

CORRECTED = EchoOptions(legacy_required_gating=False)


def _result_lines(graph, analyzer, options: EchoOptions | None = None) -> list[str]:
    buf = StringIO()
    write_analysis_result(buf, graph, analyzer, options)
    text = buf.getvalue()
    assert text.startswith("analysis_result:\n")
    assert text.endswith("\n\n")
    return [line for line in text.splitlines()[1:] if line]


def _tag_lines(tag: TimingTag, options: EchoOptions | None = None) -> list[str]:
    buf = StringIO()
    write_tags(buf, TagType.SETUP_DATA, [tag], NodeId(4), options)
    return buf.getvalue().splitlines()


class RecordingAnalyzer:
    """Analyzer stub counting capability queries."""

    def __init__(self, analyzer: TimingAnalyzer) -> None:
        self._analyzer = analyzer
        self.queries = 0

    def setup_view(self):
        self.queries += 1
        return self._analyzer.setup_view()

    def hold_view(self):
        self.queries += 1
        return self._analyzer.hold_view()


class TestCapabilityGating:
    def test_no_views_writes_no_tag_lines(self, sample_graph: TimingGraph) -> None:
        assert _result_lines(sample_graph, TimingAnalyzer()) == []

    def test_setup_only(
        self, sample_graph: TimingGraph, sample_analyzer: TimingAnalyzer
    ) -> None:
        analyzer = TimingAnalyzer(setup=sample_analyzer.setup_view())
        types = {line.split()[1] for line in _result_lines(sample_graph, analyzer)}
        assert types == {"SETUP_DATA", "SETUP_CLOCK"}

    def test_hold_only(
        self, sample_graph: TimingGraph, sample_analyzer: TimingAnalyzer
    ) -> None:
        analyzer = TimingAnalyzer(hold=sample_analyzer.hold_view())
        assert _result_lines(sample_graph, analyzer) == [
            " type: HOLD_DATA node: 2 domain: 1 arr: 2.75 req: 0.125",
            " type: HOLD_CLOCK node: 4 domain: 0 arr: 0.25 req: 0.25",
        ]

    def test_empty_view_writes_nothing(self, sample_graph: TimingGraph) -> None:
        analyzer = AnalyzerBuilder().enable_setup().enable_hold().build()
        assert _result_lines(sample_graph, analyzer) == []

    def test_views_resolved_once(
        self, sample_graph: TimingGraph, sample_analyzer: TimingAnalyzer
    ) -> None:
        recording = RecordingAnalyzer(sample_analyzer)
        _result_lines(sample_graph, recording)
        assert recording.queries == 2


class TestOrdering:
    def test_sample(
        self, sample_graph: TimingGraph, sample_analyzer: TimingAnalyzer
    ) -> None:
        assert _result_lines(sample_graph, sample_analyzer) == [
            " type: SETUP_DATA node: 0 domain: 1 arr: 0.5 req: 8.75",
            " type: SETUP_DATA node: 1 domain: 1 arr: 1.5 req: 9",
            " type: SETUP_DATA node: 2 domain: 1 arr: 2.75 req: 9.5",
            " type: SETUP_CLOCK node: 3 domain: 0 arr: 0 req: nan",
            " type: SETUP_CLOCK node: 4 domain: 0 arr: 0.25 req: nan",
            " type: HOLD_DATA node: 2 domain: 1 arr: 2.75 req: 0.125",
            " type: HOLD_CLOCK node: 4 domain: 0 arr: 0.25 req: 0.25",
        ]

    def test_data_pass_completes_before_clock_pass(
        self, sample_graph: TimingGraph
    ) -> None:
        analyzer = (
            AnalyzerBuilder()
            .add_setup_clock_tag(0, 0, arrival=0.0, required=1.0)
            .add_setup_data_tag(5, 0, arrival=3.0, required=4.0)
            .build()
        )
        types = [line.split()[1] for line in _result_lines(sample_graph, analyzer)]
        assert types == ["SETUP_DATA", "SETUP_CLOCK"]

    def test_nodes_ascending_within_pass(self, sample_graph: TimingGraph) -> None:
        analyzer = (
            AnalyzerBuilder()
            .add_hold_data_tag(4, 0, arrival=1.0, required=0.5)
            .add_hold_data_tag(1, 0, arrival=1.0, required=0.5)
            .add_hold_data_tag(3, 0, arrival=1.0, required=0.5)
            .build()
        )
        nodes = [int(line.split()[3]) for line in _result_lines(sample_graph, analyzer)]
        assert nodes == [1, 3, 4]

    def test_every_tag_of_a_node_is_written(self, sample_graph: TimingGraph) -> None:
        analyzer = (
            AnalyzerBuilder()
            .add_setup_data_tag(2, 1, arrival=1.0, required=2.0)
            .add_setup_data_tag(2, 0, arrival=1.5, required=2.5)
            .build()
        )
        assert _result_lines(sample_graph, analyzer) == [
            " type: SETUP_DATA node: 2 domain: 1 arr: 1 req: 2",
            " type: SETUP_DATA node: 2 domain: 0 arr: 1.5 req: 2.5",
        ]


class TestTagLine:
    def test_both_times(self) -> None:
        tag = TimingTag(DomainId(2), arrival=1.5, required=4.0)
        assert _tag_lines(tag) == [" type: SETUP_DATA node: 4 domain: 2 arr: 1.5 req: 4"]

    def test_neither_time(self) -> None:
        assert _tag_lines(TimingTag(DomainId(0))) == []
        assert _tag_lines(TimingTag(DomainId(0)), CORRECTED) == []

    def test_returns_line_count(self) -> None:
        tags = [
            TimingTag(DomainId(0), arrival=1.0, required=2.0),
            TimingTag(DomainId(1)),
            TimingTag(DomainId(2), arrival=0.5),
        ]
        assert write_tags(StringIO(), "HOLD_DATA", tags, NodeId(0)) == 2


class TestRequiredGating:
    """The ``req:`` field is gated on the arrival time by default.

    The legacy behaviour drops a tag whose only set time is its required
    time. ``EchoOptions(legacy_required_gating=False)`` gates each field on
    its own value instead.
    """

    @pytest.mark.parametrize("arrival", [None, math.nan])
    def test_legacy_drops_required_only_tag(self, arrival: float | None) -> None:
        tag = TimingTag(DomainId(0), arrival=arrival, required=5.0)
        assert _tag_lines(tag) == []

    def test_legacy_writes_nan_required(self) -> None:
        tag = TimingTag(DomainId(0), arrival=1.0)
        assert _tag_lines(tag) == [" type: SETUP_DATA node: 4 domain: 0 arr: 1 req: nan"]

    def test_corrected_writes_required_only_tag(self) -> None:
        tag = TimingTag(DomainId(0), arrival=None, required=5.0)
        assert _tag_lines(tag, CORRECTED) == [" type: SETUP_DATA node: 4 domain: 0 req: 5"]

    def test_corrected_omits_unset_required(self) -> None:
        tag = TimingTag(DomainId(0), arrival=1.0)
        assert _tag_lines(tag, CORRECTED) == [" type: SETUP_DATA node: 4 domain: 0 arr: 1"]

    def test_corrected_sample(
        self, sample_graph: TimingGraph, sample_analyzer: TimingAnalyzer
    ) -> None:
        lines = _result_lines(sample_graph, sample_analyzer, CORRECTED)
        assert " type: SETUP_DATA node: 2 domain: 0 req: 10" in lines
        assert " type: SETUP_CLOCK node: 3 domain: 0 arr: 0" in lines
        assert not any("nan" in line for line in lines)
        assert len(lines) == 8

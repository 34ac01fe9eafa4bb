"""Tests for the tracer module."""

import json

import numpy as np
import pytest


@pytest.fixture(autouse=True)
def tracer_off():
    """Leave the global tracer disabled after each test."""
    yield
    from wedgematch.tracer import configure_tracer
    configure_tracer(enabled=False)


class TestSummarize:
    """Tests for object summarization."""

    def test_numpy_array_summary(self):
        """Arrays are summarized by dtype and shape."""
        from wedgematch.tracer import summarize

        summary = summarize(np.zeros((4, 2)))

        assert "ndarray" in summary
        assert "4x2" in summary
        assert "float64" in summary

    def test_summary_capped_length(self):
        from wedgematch.tracer import summarize

        large_dict = {f"key_{i}": f"value_{i}" for i in range(100)}

        assert len(summarize(large_dict, max_len=40)) <= 40

    def test_path_map_counts_points(self, single_wedge):
        from wedgematch.tracer import summarize

        summary = summarize(single_wedge)

        assert "len=3" in summary
        assert "points=12" in summary

    def test_set_summary(self):
        from wedgematch.tracer import summarize

        assert summarize({"a", "b"}) == "set(len=2)"

    def test_long_string_summary(self):
        from wedgematch.tracer import summarize

        summary = summarize("a" * 1000)

        assert "len=1000" in summary
        assert len(summary) <= 200

    def test_none_and_numbers(self):
        from wedgematch.tracer import summarize

        assert summarize(None) == "None"
        assert summarize(3) == "3"
        assert summarize(0.1234567891) == "0.123457"

    def test_pydantic_model_summary(self):
        from wedgematch.models import MatchResult
        from wedgematch.tracer import summarize

        assert "MatchResult" in summarize(MatchResult())


class TestTracerSpan:
    """Tests for tracer span functionality."""

    def test_span_nesting(self, capsys):
        """Inner spans are indented under outer ones."""
        from wedgematch.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with tracer.span("outer", module="test"):
            with tracer.span("inner", module="test"):
                tracer.event("inside")

        lines = capsys.readouterr().err.strip().split("\n")

        assert len(lines) == 5
        assert "test:outer  start" in lines[0]
        assert "  test:inner  start" in lines[1]
        assert "    test:inner  inside" in lines[2]
        assert "end ok" in lines[4]

    def test_span_exception_unwinds(self, capsys):
        from wedgematch.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with pytest.raises(ValueError):
            with tracer.span("broken", module="test"):
                raise ValueError("bad curve")

        err = capsys.readouterr().err
        assert "ERROR" in err
        assert "bad curve" in err
        assert tracer._depth == 0
        assert tracer._span_stack == []

    def test_level_filtering(self, capsys):
        from wedgematch.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="WARN")
        tracer = get_tracer()

        tracer.event("hidden", level="DEBUG")
        tracer.event("shown", level="WARN")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_json_output(self, capsys):
        from wedgematch.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO", json_output=True)

        get_tracer().event("rescan", max_dist=4.5)

        lines = capsys.readouterr().err.strip().split("\n")
        record = json.loads(lines[-1])
        assert record["message"] == "rescan max_dist=4.5"
        assert record["meta"] == {"max_dist": "4.5"}

    def test_tracer_disabled_no_output(self, capsys):
        from wedgematch.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=False)
        tracer = get_tracer()

        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        assert capsys.readouterr().err == ""


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        from wedgematch.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="double")
        def double(x):
            return x * 2

        assert double(5) == 10

    def test_decorator_logs_span(self, capsys):
        from wedgematch.tracer import configure_tracer, trace

        configure_tracer(enabled=True, level="INFO")

        @trace(label="scaled", arg_names=["factor"])
        def scaled(x, factor=1):
            return x * factor

        assert scaled(2, factor=3) == 6
        assert "scaled  start factor=3" in capsys.readouterr().err

    def test_decorator_with_exception(self):
        from wedgematch.tracer import configure_tracer, trace

        configure_tracer(enabled=True, level="ERROR")

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            failing_func()

"""End-to-end tests stacking several operators."""

import funcops
import pytest
from funcops import (
    FuncOpsError,
    SinkNotWritableError,
    and_,
    bind,
    compose,
    delay,
    every,
    fallback,
    memoize,
    not_,
    remember,
)
from helpers import CallCounter


class TestStackedWrappers:
    """Wrappers compose like ordinary functions."""

    def test_progress_over_cached_delayed_function(self):
        """every(2, memoize(delay(0, f))) over [1, 1, 2] computes twice and marks once."""
        counter = CallCounter(lambda x: {'value': x})
        markers = []
        wrapped = every(2, memoize(delay(0, counter)), notify=markers.append)

        results = [wrapped(x) for x in [1, 1, 2]]

        assert counter.count == 2
        assert markers == [2]
        assert results == [{'value': 1}, {'value': 1}, {'value': 2}]
        assert results[0] is results[1]

    def test_default_marker_written_once(self, capsys):
        """With the default notifier one marker appears for three calls at n=2."""
        wrapped = every(2, memoize(delay(0, CallCounter())))
        for x in [1, 1, 2]:
            wrapped(x)
        assert capsys.readouterr().out == '.'

    def test_safe_cached_parser(self):
        """fallback outside memoize: failures are never cached, successes are."""
        calls = []

        def parse(text):
            calls.append(text)
            return int(text)

        safe = fallback(None, memoize(parse))
        assert [safe(t) for t in ['1', 'x', '1', 'x']] == [1, None, 1, None]
        assert calls == ['1', 'x', 'x']

    def test_bound_composition_with_predicate(self):
        """Bound functions feed compositions and predicates."""
        scale = bind(lambda factor, x: factor * x, 3)
        shift = bind(lambda x, offset: x + offset, offset=1)
        transform = compose(shift, scale)
        in_range = and_(lambda n: n > 0, not_(lambda n: n > 10))

        assert [transform(x) for x in range(5)] == [1, 4, 7, 10, 13]
        assert [x for x in range(5) if in_range(transform(x))] == [0, 1, 2, 3]

    def test_recorder_sees_only_misses(self):
        """A recorder under memoize records only the computed calls."""
        recorded = remember(abs)
        cached = memoize(recorded)
        for x in [-1, -1, 2, -1]:
            cached(x)
        assert [r.args for r in recorded.history] == [(-1,), (2,)]


class TestErrors:
    """Tests for the error hierarchy."""

    def test_sink_error_carries_code_and_sink(self, tmp_path):
        """SinkNotWritableError names the sink and the reason."""
        target = tmp_path / 'nowhere' / 'out.log'
        with pytest.raises(SinkNotWritableError) as excinfo:
            funcops.log_to(target, abs)
        error = excinfo.value
        assert isinstance(error, FuncOpsError)
        assert error.sink == target
        assert str(error).startswith('[sink-not-writable]')

    def test_base_error_str(self):
        """FuncOpsError renders as [code] message."""
        assert str(FuncOpsError('boom', code='custom')) == '[custom] boom'

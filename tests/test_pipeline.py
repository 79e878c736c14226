import pytest

from qbank.errors import TypeMismatchError
from qbank.pipeline import DiagnosticLog, Pipeline


def test_apply_transforms_value():
    p = Pipeline(2).apply(lambda v, log: v * 10)
    assert p.get() == 20


def test_map_and_filter():
    p = Pipeline([1, 2, 3, 4]).map(lambda v, log: v + 1).filter(lambda v, log: v % 2 == 0)
    assert p.get() == [2, 4]


def test_stages_do_not_mutate_previous_values():
    first = Pipeline([1, 2, 3])
    second = first.map(lambda v, log: v * 2)
    assert first.get() == [1, 2, 3]
    assert second.get() == [2, 4, 6]


def test_log_is_shared_across_stages():
    def noisy(v, log):
        log(f"saw {v}")
        return v

    first = Pipeline([1, 2])
    last = first.map(noisy).apply(lambda v, log: (log("done"), v)[1])
    assert last.get_log() == ["saw 1", "saw 2", "done"]
    # earlier stages see the same log
    assert first.get_log() == ["saw 1", "saw 2", "done"]


def test_get_log_returns_snapshot():
    p = Pipeline(1).apply(lambda v, log: (log("one"), v)[1])
    snapshot = p.get_log()
    snapshot.append("tampered")
    assert p.get_log() == ["one"]


def test_filter_may_log_for_every_item():
    def keep_even(v, log):
        log(f"checked {v}")
        return v % 2 == 0

    p = Pipeline([1, 2, 3]).filter(keep_even)
    assert p.get() == [2]
    assert len(p.get_log()) == 3


def test_independent_pipelines_do_not_share_logs():
    a = Pipeline(1).apply(lambda v, log: (log("a"), v)[1])
    b = Pipeline(1).apply(lambda v, log: (log("b"), v)[1])
    assert a.get_log() == ["a"]
    assert b.get_log() == ["b"]


@pytest.mark.parametrize("value", ["text", 5, None, {"a": 1}])
def test_map_and_filter_require_sequences(value):
    with pytest.raises(TypeMismatchError):
        Pipeline(value).map(lambda v, log: v)
    with pytest.raises(TypeMismatchError):
        Pipeline(value).filter(lambda v, log: True)


def test_diagnostic_log_is_callable():
    log = DiagnosticLog()
    log("first")
    log.append("second")
    assert log.entries() == ["first", "second"]
    assert len(log) == 2

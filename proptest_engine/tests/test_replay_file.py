"""
Tests for the replay file protocol.

Critical: a partially written file must parse to exactly the steps that
were appended, and anything unexpected must be reported as corrupt.
"""

import io
import os
import tempfile

import pytest

from proptest_engine.core.errors import ConfigurationError, ReplayStoreError
from proptest_engine.core.outcome import Outcome, OutcomeKind
from proptest_engine.replay import (
    FAILED_IN_OTHER_PROCESS,
    REJECTED_IN_OTHER_PROCESS,
    Replay,
    ReplayState,
    append,
    load,
    open_file,
    parse,
    rewrite,
    terminate,
    write_full,
)

SEED = (1, 2, 3, 4294967295)
STEPS = [
    Outcome.passed(),
    Outcome.failed("boom"),
    Outcome.rejected("too small"),
    Outcome.passed(),
]


def _kinds(steps):
    return [s.kind for s in steps]


def test_write_full_format():
    buf = io.BytesIO()
    write_full(Replay(SEED, STEPS), buf)
    assert buf.getvalue() == b"1\n2\n3\n4294967295\n+-!+"


def test_round_trip_in_progress():
    """write_full then parse yields IN_PROGRESS with equal seed and steps."""
    buf = io.BytesIO()
    write_full(Replay(SEED, STEPS), buf)

    status = parse(buf)
    assert status.state is ReplayState.IN_PROGRESS
    assert status.is_in_progress
    assert status.replay.seed == SEED
    assert status.replay.same_steps(STEPS)


def test_parsed_reasons_are_synthetic():
    buf = io.BytesIO()
    write_full(Replay(SEED, STEPS), buf)

    steps = parse(buf).replay.steps
    assert steps[0].reason is None
    assert steps[1].reason == FAILED_IN_OTHER_PROCESS
    assert steps[2].reason == REJECTED_IN_OTHER_PROCESS


def test_round_trip_empty_steps():
    buf = io.BytesIO()
    write_full(Replay(SEED), buf)

    status = parse(buf)
    assert status.is_in_progress
    assert status.replay.steps == []


def test_terminator_detected():
    buf = io.BytesIO()
    write_full(Replay(SEED, STEPS), buf)
    terminate(buf)

    status = parse(buf)
    assert status.is_terminated
    assert status.replay.seed == SEED
    assert status.replay.same_steps(STEPS)


def test_first_terminator_ends_parsing():
    status = parse(io.BytesIO(b"1\n2\n3\n4\n+-.?!garbage"))
    assert status.is_terminated
    assert _kinds(status.replay.steps) == [OutcomeKind.PASS, OutcomeKind.FAIL]


@pytest.mark.parametrize("data", [
    b"",
    b"1\n2\n3\n",
    b"1\n2\nthree\n4\n+",
    b"1\n2\n\n4\n+",
    b"1\n2\n3\n-4\n+",
    b"1\n2\n3\n+4\n+",
    b"1\n2\n3\n4.5\n+",
    b"1\n2\n3\n4294967296\n+",
    b"1\n2\n3\n4\n+-x",
    b"1\n2\n3\n4\n+\n-",
    b"1\n2\n3\n4\n ++",
])
def test_corrupt_detection(data):
    status = parse(io.BytesIO(data))
    assert status.state is ReplayState.CORRUPT
    assert status.is_corrupt
    assert status.replay is None


def test_parse_rewinds_before_reading():
    buf = io.BytesIO()
    write_full(Replay(SEED, STEPS), buf)
    buf.seek(0, os.SEEK_END)

    assert parse(buf).replay.same_steps(STEPS)
    assert parse(buf).replay.same_steps(STEPS)


def test_append_to_file_one_glyph_per_step():
    """Appended steps show up in a parse of the same open handle."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "replay")
        with open_file(path) as f:
            write_full(Replay(SEED), f)
            for step in STEPS:
                before = os.path.getsize(path)
                append(f, step)
                assert os.path.getsize(path) == before + 1

            status = parse(f)
            assert status.is_in_progress
            assert status.replay.same_steps(STEPS)

            terminate(f)
            assert parse(f).is_terminated


def test_append_after_parse_goes_to_end():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "replay")
        with open_file(path) as f:
            write_full(Replay(SEED, STEPS[:2]), f)
            parse(f)
            f.seek(0)
            append(f, Outcome.passed())

        with open(path, "rb") as f:
            assert f.read().endswith(b"+-+")


def test_reopen_never_truncates():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "replay")
        with open_file(path) as f:
            write_full(Replay(SEED, STEPS), f)

        with open_file(path) as f:
            status = parse(f)
            append(f, Outcome.failed("again"))

        status = load(path)
        assert status.replay.same_steps(STEPS + [Outcome.failed("x")])


def test_new_file_parses_corrupt():
    with tempfile.TemporaryDirectory() as tmpdir:
        with open_file(os.path.join(tmpdir, "fresh")) as f:
            assert parse(f).is_corrupt


def test_rewrite_replaces_content():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "replay")
        with open(path, "wb") as f:
            f.write(b"junk")

        rewrite(path, Replay(SEED, STEPS), terminated=True)
        status = load(path)
        assert status.is_terminated
        assert status.replay.same_steps(STEPS)


def test_io_failure_is_not_corruption():
    """Storage errors raise; they are never reported as CORRUPT."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ReplayStoreError):
            open_file(tmpdir)
        with pytest.raises(ReplayStoreError):
            load(os.path.join(tmpdir, "missing"))


def test_replay_rejects_bad_seed():
    with pytest.raises(ConfigurationError):
        Replay((1, 2, 3))
    with pytest.raises(ConfigurationError):
        Replay((1, 2, 3, 2 ** 32))
    with pytest.raises(ConfigurationError):
        Replay((1, 2, 3, -1))


def test_merge_appends_extra_suffix():
    a = Replay(SEED, STEPS[:1])
    b = Replay(SEED, STEPS)
    a.merge(b)
    assert a.steps == b.steps


def test_merge_never_shortens():
    a = Replay(SEED, STEPS)
    b = Replay(SEED, STEPS[:2])
    a.merge(b)
    assert a.steps == STEPS

    c = Replay(SEED, [Outcome.rejected("r")] * 4)
    a.merge(c)
    assert a.steps == STEPS


def test_merge_keeps_own_prefix():
    a = Replay(SEED, [Outcome.failed("mine")])
    b = Replay(SEED, [Outcome.passed(), Outcome.passed(), Outcome.rejected("r")])
    a.merge(b)
    assert _kinds(a.steps) == [OutcomeKind.FAIL, OutcomeKind.PASS, OutcomeKind.REJECT]


def test_counts_and_glyphs():
    r = Replay(SEED, STEPS)
    assert r.glyphs() == "+-!+"
    assert r.counts() == {"pass": 2, "fail": 1, "reject": 1}

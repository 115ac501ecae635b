"""
Replay file format.

    <seed word 0>\n
    <seed word 1>\n
    <seed word 2>\n
    <seed word 3>\n
    <outcome glyphs...>[.]

Glyphs: '+' pass, '-' fail, '!' reject, '.' run terminated.

A worker appends one glyph per finished test case with a single one-byte
write, so no framing and no lock are needed: at most one writer is alive
at a time and the reader only ever reads from the start. A missing '.' at
the end means the run is still going, or the worker died.

Any byte outside the glyph set makes the whole file corrupt; the valid
prefix is not salvaged.
Seed lines must be plain decimal digits; a sign such as "+5" is corrupt.
"""

import io
import os
from typing import BinaryIO, Dict, List

from ..core.errors import ReplayStoreError
from ..core.outcome import Outcome, OutcomeKind
from ..core.rng import WORD_MAX
from .model import Replay, ReplayFileStatus

TERMINATOR = "."

FAILED_IN_OTHER_PROCESS = "failed in other process"
REJECTED_IN_OTHER_PROCESS = "rejected in other process"

_GLYPH_TO_OUTCOME: Dict[str, Outcome] = {
    OutcomeKind.PASS.value: Outcome.passed(),
    OutcomeKind.FAIL.value: Outcome.failed(FAILED_IN_OTHER_PROCESS),
    OutcomeKind.REJECT.value: Outcome.rejected(REJECTED_IN_OTHER_PROCESS),
}


def open_file(path: str) -> BinaryIO:
    """
    Open a replay file for read + append, creating it if missing.

    Existing content is never truncated.

    Raises:
        ReplayStoreError: If the file cannot be opened
    """
    try:
        return open(path, "a+b")
    except OSError as ex:
        raise ReplayStoreError(str(ex)) from ex


def _sync(f: BinaryIO) -> None:
    f.flush()
    try:
        fd = f.fileno()
    except (AttributeError, io.UnsupportedOperation):
        # in-memory buffers have nothing to fsync
        return
    os.fsync(fd)


def _write(f: BinaryIO, data: bytes) -> None:
    try:
        f.write(data)
        _sync(f)
    except OSError as ex:
        raise ReplayStoreError(str(ex)) from ex


def append(f: BinaryIO, outcome: Outcome) -> None:
    """
    Append one outcome glyph.

    Raises:
        ReplayStoreError: If the write fails
    """
    _write(f, outcome.glyph.encode("ascii"))


def terminate(f: BinaryIO) -> None:
    """
    Append the termination mark.

    Raises:
        ReplayStoreError: If the write fails
    """
    _write(f, TERMINATOR.encode("ascii"))


def write_full(replay: Replay, f: BinaryIO) -> None:
    """
    Write the complete state of replay: seed lines then unterminated glyphs.

    Used for the initial snapshot before a worker starts appending.

    Raises:
        ReplayStoreError: If the write fails
    """
    header = "".join(f"{word}\n" for word in replay.seed)
    _write(f, (header + replay.glyphs()).encode("ascii"))


def parse(f: BinaryIO) -> ReplayFileStatus:
    """
    Parse a replay out of f, reading from the beginning.

    Fail and reject steps carry synthetic reasons since the originals are
    not stored.

    Returns:
        ReplayFileStatus: TERMINATED at the first '.', IN_PROGRESS at end of
        input, CORRUPT on a bad seed line or unknown glyph

    Raises:
        ReplayStoreError: If the file cannot be read
    """
    try:
        f.seek(0)
        seed: List[int] = []
        for _ in range(4):
            word = f.readline().strip()
            if not word.isdigit():
                return ReplayFileStatus.corrupt()
            value = int(word)
            if value > WORD_MAX:
                return ReplayFileStatus.corrupt()
            seed.append(value)
        body = f.read()
    except OSError as ex:
        raise ReplayStoreError(str(ex)) from ex

    steps: List[Outcome] = []
    for byte in body:
        glyph = chr(byte)
        if glyph == TERMINATOR:
            return ReplayFileStatus.terminated(Replay(tuple(seed), steps))
        outcome = _GLYPH_TO_OUTCOME.get(glyph)
        if outcome is None:
            return ReplayFileStatus.corrupt()
        steps.append(outcome)

    return ReplayFileStatus.in_progress(Replay(tuple(seed), steps))


def load(path: str) -> ReplayFileStatus:
    """
    Parse the replay file at path without creating it.

    Raises:
        ReplayStoreError: If the file cannot be opened or read
    """
    try:
        with open(path, "rb") as f:
            return parse(f)
    except OSError as ex:
        raise ReplayStoreError(str(ex)) from ex


def rewrite(path: str, replay: Replay, terminated: bool = False) -> None:
    """
    Replace the file at path with the full state of replay.

    Only for offline tools; never call while a worker may be appending.

    Raises:
        ReplayStoreError: If the file cannot be written
    """
    try:
        with open(path, "wb") as f:
            write_full(replay, f)
            if terminated:
                terminate(f)
    except OSError as ex:
        raise ReplayStoreError(str(ex)) from ex

"""Tests for the pexpect-driven UCI engine wrapper."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from metricchess.core.notation import STARTING_FEN
from metricchess.engine.search import SearchLimits
from metricchess.engine.uci import (
    VARIANT_INI,
    UciEngine,
    UciEngineError,
    parse_bestmove,
)

needs_pty = pytest.mark.skipif(
    sys.platform == "win32", reason="pexpect.spawn needs a pty"
)

# Shared UCI handshake; each fake engine defines ``on_command`` for the rest.
_ENGINE_LOOP = """
for line in iter(sys.stdin.readline, ""):
    command = line.strip()
    if command == "uci":
        print("id name FakeEngine", flush=True)
        print("uciok", flush=True)
    elif command == "isready":
        print("readyok", flush=True)
    elif command == "quit":
        break
    else:
        on_command(command)
"""

_PROMPT_ENGINE = """
def on_command(command):
    if command.startswith("go"):
        print("info depth 1 score cp 0", flush=True)
        print("bestmove REPLY", flush=True)
"""

# Answers its first search only once told to stop, later searches at once.
_LAGGING_ENGINE = """
searches = 0
pending = None

def on_command(command):
    global searches, pending
    if command.startswith("go"):
        searches += 1
        if searches == 1:
            pending = "a9a7"
        else:
            print("bestmove b9b7", flush=True)
    elif command == "stop" and pending is not None:
        print("bestmove " + pending, flush=True)
        pending = None
"""

# The first process never answers, not even ``stop``; a restarted one does.
_STUCK_ONCE_ENGINE = """
import os

marker = sys.argv[0] + ".started"
first_run = not os.path.exists(marker)
open(marker, "w").close()

def on_command(command):
    if command.startswith("go") and not first_run:
        print("bestmove b9b7", flush=True)
"""


def _fake_engine(
    tmp_path: Path, body: str = _PROMPT_ENGINE, reply: str = "a9a7"
) -> Path:
    script = tmp_path / "fake_engine.py"
    source = f"#!{sys.executable}\nimport sys\n" + body.replace("REPLY", reply)
    script.write_text(source + _ENGINE_LOOP, encoding="utf-8")
    script.chmod(0o755)
    return script


class TestParseBestmove:
    def test_move_token(self) -> None:
        assert parse_bestmove("bestmove a9a7 ponder a2a3") == "a9a7"

    def test_promotion_and_two_digit_ranks(self) -> None:
        assert parse_bestmove("bestmove b9b10q") == "b9b10q"

    @pytest.mark.parametrize("line", ["bestmove (none)", "bestmove 0000", "info"])
    def test_no_move(self, line: str) -> None:
        assert parse_bestmove(line) is None


class TestVariantIni:
    def test_describes_board_and_pieces(self) -> None:
        assert "maxRank = 10" in VARIANT_INI
        assert "maxFile = j" in VARIANT_INI
        assert f"startFen = {STARTING_FEN}" in VARIANT_INI
        assert "customPiece1 = t:HCZG" in VARIANT_INI
        assert "castling = false" in VARIANT_INI


class TestUciEngine:
    def test_missing_binary_raises(self, tmp_path: Path) -> None:
        engine = UciEngine(tmp_path / "missing-engine")
        with pytest.raises(UciEngineError):
            engine.search(STARTING_FEN, SearchLimits(time_limit_ms=10))
        assert not engine.is_running

    def test_close_without_start_is_noop(self) -> None:
        UciEngine("/nonexistent").close()

    @needs_pty
    def test_search_with_fake_engine(self, tmp_path: Path) -> None:
        with UciEngine(_fake_engine(tmp_path), startup_timeout=5.0) as engine:
            result = engine.search(STARTING_FEN, SearchLimits(time_limit_ms=50))
            assert result.best_move_uci == "a9a7"
            assert engine.is_running
            variant_path = engine.variant_path
            assert variant_path is not None
            assert variant_path.read_text(encoding="utf-8") == VARIANT_INI
        assert not engine.is_running
        assert not variant_path.exists()
        assert engine.variant_path is None

    @needs_pty
    def test_supplied_variant_file_is_kept(self, tmp_path: Path) -> None:
        variant_path = tmp_path / "custom.ini"
        variant_path.write_text(VARIANT_INI, encoding="utf-8")
        with UciEngine(_fake_engine(tmp_path), variant_path=variant_path) as engine:
            engine.search(STARTING_FEN, SearchLimits(time_limit_ms=50))
        assert variant_path.exists()
        assert engine.variant_path == variant_path

    @needs_pty
    def test_null_bestmove_means_no_move(self, tmp_path: Path) -> None:
        with UciEngine(_fake_engine(tmp_path, reply="(none)")) as engine:
            result = engine.search(STARTING_FEN, SearchLimits(time_limit_ms=50))
        assert result.best_move_uci is None

    @needs_pty
    def test_late_reply_is_not_given_to_next_search(self, tmp_path: Path) -> None:
        limits = SearchLimits(time_limit_ms=50)
        script = _fake_engine(tmp_path, _LAGGING_ENGINE)
        with UciEngine(script, timeout_grace_ms=100) as engine:
            with pytest.raises(UciEngineError):
                engine.search(STARTING_FEN, limits)
            assert engine.is_running

            result = engine.search(STARTING_FEN, limits)

        assert result.best_move_uci == "b9b7"

    @needs_pty
    def test_engine_ignoring_stop_is_restarted(self, tmp_path: Path) -> None:
        limits = SearchLimits(time_limit_ms=50)
        script = _fake_engine(tmp_path, _STUCK_ONCE_ENGINE)
        with UciEngine(script, timeout_grace_ms=100) as engine:
            with pytest.raises(UciEngineError):
                engine.search(STARTING_FEN, limits)
            assert not engine.is_running

            result = engine.search(STARTING_FEN, limits)

        assert result.best_move_uci == "b9b7"

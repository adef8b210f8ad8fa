"""UCI engine wrapper for external 10×10-capable engines (e.g. Fairy-Stockfish).

The engine process is started once and kept running.  Communication goes
through pexpect, which allocates a PTY and so avoids block-buffered output
from the child.
"""

from __future__ import annotations

import logging
import re
import tempfile
import threading
import time
from pathlib import Path

import pexpect

from metricchess.core.notation import STARTING_FEN
from metricchess.engine.search import CancelCheck, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

# Variant definition in Fairy-Stockfish's variants.ini format.  The trebuchet
# leaps to exactly Chebyshev distance 3: threeleaper, camel, zebra, tripper.
VARIANT_INI = f"""\
[metricchess:chess]
maxRank = 10
maxFile = j
startFen = {STARTING_FEN}
promotionRegionWhite = *10
promotionRegionBlack = *1
promotionPieceTypes = qrbnth
doubleStep = true
doubleStepRegionWhite = *1 *2 *3 *4 *5 *6 *7 *8
doubleStepRegionBlack = *3 *4 *5 *6 *7 *8 *9 *10
castling = false
customPiece1 = t:HCZG
customPiece2 = h:K
"""

_BESTMOVE_RE = re.compile(r"bestmove\s+(\S+)[^\r\n]*\r?\n")
_NO_MOVE_TOKENS = frozenset({"(none)", "0000"})
_POLL_INTERVAL_S = 0.05
_STOP_GRACE_S = 1.0


class UciEngineError(Exception):
    """Raised when UCI communication fails."""


def parse_bestmove(line: str) -> str | None:
    """Move token of a ``bestmove`` line, ``None`` for a null move or no match."""
    match = re.search(r"bestmove\s+(\S+)", line)
    if match is None:
        return None
    token = match.group(1)
    if token in _NO_MOVE_TOKENS:
        return None
    return token


class UciEngine:
    """Long-lived UCI subprocess.

    The process is spawned on the first :meth:`search` so that it belongs to
    the thread that uses it.  Calls are serialised with a lock.

    Example::

        with UciEngine("/usr/bin/fairy-stockfish") as engine:
            result = engine.search(fen, SearchLimits(time_limit_ms=500))
    """

    def __init__(
        self,
        binary_path: str | Path,
        *,
        variant_name: str = "metricchess",
        variant_path: str | Path | None = None,
        startup_timeout: float = 10.0,
        timeout_grace_ms: int = 2000,
    ) -> None:
        self.binary_path = Path(binary_path)
        self.variant_name = variant_name
        self.variant_path = Path(variant_path) if variant_path else None
        self.startup_timeout = startup_timeout
        self.timeout_grace_ms = timeout_grace_ms

        self._child: pexpect.spawn | None = None
        self._owns_variant_file = False
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._child is not None and self._child.isalive()

    # ── Process lifecycle ────────────────────────────────────────────────

    def start(self) -> None:
        """Start the engine process and select the Metric Chess variant."""
        if self.is_running:
            return
        if not self.binary_path.exists():
            raise UciEngineError(f"Engine binary not found: {self.binary_path}")

        variant_path = self.variant_path or self._write_variant_file()
        _LOGGER.debug("Starting UCI engine: %s", self.binary_path)
        try:
            self._child = pexpect.spawn(
                str(self.binary_path),
                encoding="utf-8",
                timeout=self.startup_timeout,
            )
        except pexpect.ExceptionPexpect as exc:
            raise UciEngineError(f"Cannot start engine: {exc}") from exc

        self._send_command("uci")
        self._wait_for_response("uciok")
        self._send_command(f"setoption name VariantPath value {variant_path}")
        self._send_command(f"setoption name UCI_Variant value {self.variant_name}")
        self._send_command("isready")
        self._wait_for_response("readyok")
        _LOGGER.debug("UCI engine initialized with variant %s", self.variant_name)

    def close(self) -> None:
        """Close the engine subprocess and remove a generated variant file."""
        child = self._child
        self._child = None
        if child is not None:
            try:
                child.sendline("quit")
                child.expect(pexpect.EOF, timeout=1.0)
            except (pexpect.ExceptionPexpect, OSError) as exc:
                _LOGGER.warning("UCI engine did not quit cleanly: %s", exc)
            finally:
                if child.isalive():
                    child.terminate(force=True)
        if self._owns_variant_file and self.variant_path is not None:
            self.variant_path.unlink(missing_ok=True)
            self.variant_path = None
            self._owns_variant_file = False

    def __enter__(self) -> UciEngine:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ── Search ───────────────────────────────────────────────────────────

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """Ask the engine for a move in *fen*.

        Sends ``stop`` once *is_cancelled* turns true and raises
        :class:`UciEngineError` when no ``bestmove`` arrives within the time
        budget plus the grace period.
        """
        with self._lock:
            self.start()
            self._send_command(f"position fen {fen}")
            self._send_command(f"go movetime {limits.time_limit_ms}")
            token = self._await_bestmove(limits, is_cancelled)
        return SearchResult(best_move_uci=token)

    def _await_bestmove(
        self, limits: SearchLimits, is_cancelled: CancelCheck | None
    ) -> str | None:
        child = self._require_child()
        budget_ms = limits.time_limit_ms + self.timeout_grace_ms
        deadline = time.monotonic() + budget_ms / 1000
        stop_sent = False
        while True:
            try:
                index = child.expect(
                    [_BESTMOVE_RE, pexpect.TIMEOUT], timeout=_POLL_INTERVAL_S
                )
            except pexpect.EOF:
                self._child = None
                raise UciEngineError("Engine process terminated") from None
            if index == 0:
                return parse_bestmove(child.after)
            if not stop_sent and is_cancelled is not None and is_cancelled():
                self._send_command("stop")
                stop_sent = True
            if time.monotonic() > deadline:
                self._abandon_search(child)
                raise UciEngineError("Timeout waiting for 'bestmove'")

    def _abandon_search(self, child: pexpect.spawn) -> None:
        """Stop an overdue search and discard the ``bestmove`` it still owes.

        An engine that does not answer ``stop`` in time is closed, so the next
        search starts a fresh process instead of reading a stale reply.
        """
        self._send_command("stop")
        try:
            child.expect(_BESTMOVE_RE, timeout=_STOP_GRACE_S)
        except (pexpect.TIMEOUT, pexpect.EOF):
            _LOGGER.warning("Engine ignored 'stop'; closing it")
            self.close()

    # ── Protocol helpers ─────────────────────────────────────────────────

    def _require_child(self) -> pexpect.spawn:
        if self._child is None:
            raise UciEngineError("Engine not running")
        return self._child

    def _send_command(self, command: str) -> None:
        _LOGGER.debug("UCI send: %s", command)
        self._require_child().sendline(command)

    def _wait_for_response(self, expected: str) -> str:
        child = self._require_child()
        try:
            child.expect(expected, timeout=self.startup_timeout)
        except pexpect.TIMEOUT:
            raise UciEngineError(f"Timeout waiting for '{expected}'") from None
        except pexpect.EOF:
            self._child = None
            raise UciEngineError("Engine process terminated unexpectedly") from None
        return child.after

    def _write_variant_file(self) -> Path:
        handle = tempfile.NamedTemporaryFile(
            "w", prefix="metricchess-", suffix=".ini", delete=False, encoding="utf-8"
        )
        with handle:
            handle.write(VARIANT_INI)
        self.variant_path = Path(handle.name)
        self._owns_variant_file = True
        return self.variant_path

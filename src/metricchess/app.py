"""Application entry point: engine self-play printed as a text board."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from metricchess.config import EngineSettings, GameSettings
from metricchess.core.enums import Color, GameResult
from metricchess.core.geometry import render_text
from metricchess.core.move import Move
from metricchess.engine.search import EngineOutcome
from metricchess.game.state import GameState

_LOGGER = logging.getLogger(__name__)


def run_self_play(
    settings: GameSettings | None = None,
    engine_settings: EngineSettings | None = None,
    *,
    max_plies: int = 200,
    out: Callable[[str], None] = print,
) -> GameResult:
    """Let the engine play both sides until the game ends or *max_plies* pass.

    Each ply is written to *out* as its log notation followed by the board in
    the configured orientation.
    """
    from PyQt6.QtCore import QCoreApplication, QEventLoop, QTimer

    from metricchess.engine.session import EngineSession
    from metricchess.game.controller import GameController

    # Keeps the application object referenced while the loop runs.
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)

    engine_settings = engine_settings or EngineSettings()
    controller = GameController(settings)
    session = EngineSession(controller=controller, settings=engine_settings)
    loop = QEventLoop()

    def on_move(_move: Move, notation: str, state: GameState) -> None:
        entry = state.notation_log[-1]
        out(f"{entry.move_number}. {entry.player} {notation}")
        out(render_text(state.board, state.orientation))

    def on_outcome(outcome: EngineOutcome) -> None:
        if outcome.used_fallback:
            out(f"(engine {outcome.status.name.lower()}: {outcome.message})")
        if controller.state.move_count >= max_plies:
            loop.quit()

    controller.events.on_move.append(on_move)
    controller.events.on_game_over.append(lambda _result: loop.quit())
    session.on_outcome.append(on_outcome)

    # Hard stop in case the engine stops answering altogether.
    watchdog = QTimer()
    watchdog.setSingleShot(True)
    watchdog.timeout.connect(loop.quit)
    watchdog.start(max(1, max_plies) * engine_settings.timeout_ms * 2)

    session.setup()
    try:
        controller.new_game(
            session.create_ai_player(Color.WHITE),
            session.create_ai_player(Color.BLACK),
        )
        if not controller.state.is_game_over:
            loop.exec()
    finally:
        watchdog.stop()
        session.shutdown()

    result = controller.state.result
    _LOGGER.info(
        "Self-play finished after %d plies: %s",
        controller.state.move_count,
        result.name,
    )
    return result


def main() -> None:
    """Run a self-play game; an optional argument names a UCI engine binary."""
    logging.basicConfig(
        level=logging.INFO, format="%(levelname)s %(name)s: %(message)s"
    )
    engine_settings = EngineSettings()
    if len(sys.argv) > 1:
        engine_settings.engine_path = sys.argv[1]

    result = run_self_play(engine_settings=engine_settings)
    print(result.name)


if __name__ == "__main__":
    main()

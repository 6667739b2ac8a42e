"""Console entry point: AI-vs-AI self-play."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from PyQt6.QtCore import QCoreApplication, QObject, QThread, QTimer, pyqtSignal

from konane.core.enums import Color
from konane.core.move import Jump, OpeningRemoval
from konane.core.notation import moves_to_notation, result_token
from konane.core.state import GameState
from konane.core.types import MAX_BOARD_SIZE, MIN_BOARD_SIZE, validate_board_size
from konane.engine.qt_bridge import EngineWorker
from konane.engine.search import DEFAULT_DEPTH
from konane.game.controller import GameController
from konane.game.player import AIPlayer

_LOGGER = logging.getLogger(__name__)


def _board_size(text: str) -> int:
    try:
        size = int(text)
        validate_board_size(size)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return size


def _non_negative(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a value >= 0, got {value}")
    return value


def _positive(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a value >= 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="konane",
        description="Play Kōnane self-play games between two engine players.",
    )
    parser.add_argument(
        "--size",
        type=_board_size,
        default=8,
        help=f"even board side, {MIN_BOARD_SIZE}..{MAX_BOARD_SIZE} (default: 8)",
    )
    parser.add_argument(
        "--depth",
        type=_non_negative,
        default=DEFAULT_DEPTH,
        help=f"search depth in plies (default: {DEFAULT_DEPTH})",
    )
    parser.add_argument(
        "--games", type=_positive, default=1, help="number of games to play (default: 1)"
    )
    parser.add_argument(
        "--threaded",
        action="store_true",
        help="run searches on an EngineWorker in a background QThread",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _report(index: int, state: GameState) -> None:
    print(f"Game {index}: {result_token(state.result)}")
    print(moves_to_notation(list(state.move_log)))


def play_game(board_size: int, depth: int) -> GameState:
    """Play one synchronous engine-vs-engine game to the end."""
    ctrl = GameController()
    ctrl.new_game(
        black=AIPlayer(Color.BLACK, "Black engine", depth=depth),
        white=AIPlayer(Color.WHITE, "White engine", depth=depth),
        board_size=board_size,
    )
    ctrl.run_until_over()
    return ctrl.state


class ThreadedMatch(QObject):
    """Plays games with both sides searching on one background worker.

    Each :class:`AIPlayer` dispatches its state through
    :attr:`search_requested`; the queued result comes back on this
    object's thread and is handed to the player before the controller is
    polled again.
    """

    search_requested = pyqtSignal(object, int)
    finished = pyqtSignal(int)

    def __init__(self, board_size: int, depth: int, games: int) -> None:
        super().__init__()
        self._board_size = board_size
        self._games = games
        self._played = 0
        self._exit_code = 0
        self._request_id = 0
        self._controller = GameController()

        self._thread = QThread()
        self._worker = EngineWorker(max_depth=depth)
        self._worker.moveToThread(self._thread)
        self.search_requested.connect(self._worker.request_move)
        self._worker.best_move_ready.connect(self._on_best_move)
        self._worker.search_no_move.connect(self._on_failure)
        self._worker.search_cancelled.connect(self._on_failure)
        self._worker.search_error.connect(self._on_error)

    @property
    def exit_code(self) -> int:
        return self._exit_code

    def start(self) -> None:
        self._thread.start()
        self._new_game()

    def shutdown(self) -> None:
        self._worker.cancel()
        self._thread.quit()
        self._thread.wait()

    def _player(self, color: Color, name: str) -> AIPlayer:
        # Cancel is a direct call: the worker's thread is busy searching.
        return AIPlayer(
            color,
            name,
            on_request_move=self._dispatch,
            on_cancel=self._worker.cancel,
        )

    def _new_game(self) -> None:
        self._controller.new_game(
            black=self._player(Color.BLACK, "Black engine"),
            white=self._player(Color.WHITE, "White engine"),
            board_size=self._board_size,
        )
        QTimer.singleShot(0, self._advance)

    def _dispatch(self, state: GameState) -> None:
        self._request_id += 1
        _LOGGER.debug("Dispatching search %d", self._request_id)
        self.search_requested.emit(state, self._request_id)

    def _advance(self) -> None:
        while self._controller.poll():
            pass
        if not self._controller.state.is_game_over:
            return

        self._played += 1
        _report(self._played, self._controller.state)
        if self._played < self._games:
            self._new_game()
        else:
            self.finished.emit(self._exit_code)

    def _on_best_move(
        self,
        request_id: int,
        move_obj: object,
        _score: int,
        _depth: int,
        _nodes: int,
    ) -> None:
        if request_id != self._request_id:
            return
        if not isinstance(move_obj, (OpeningRemoval, Jump)):
            return
        player = self._controller.current_player
        if isinstance(player, AIPlayer):
            player.deliver_move(move_obj)
        self._advance()

    def _on_failure(self, request_id: int) -> None:
        if request_id == self._request_id:
            self._on_error(request_id, "search produced no move")

    def _on_error(self, request_id: int, message: str) -> None:
        _LOGGER.error("Search %d failed: %s", request_id, message)
        self._exit_code = 1
        self.finished.emit(self._exit_code)


def _run_threaded(board_size: int, depth: int, games: int) -> int:
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    match = ThreadedMatch(board_size, depth, games)
    match.finished.connect(app.exit)
    match.start()
    try:
        return app.exec()
    finally:
        match.shutdown()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the self-play console application."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.threaded:
        return _run_threaded(args.size, args.depth, args.games)

    for index in range(1, args.games + 1):
        _report(index, play_game(args.size, args.depth))
    _LOGGER.info("Played %d games", args.games)
    return 0


if __name__ == "__main__":
    sys.exit(main())

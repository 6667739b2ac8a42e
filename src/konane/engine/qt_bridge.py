"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from konane.core.errors import NoLegalMove
from konane.core.state import GameState
from konane.engine.minimax import MinimaxSearchEngine
from konane.engine.search import DEFAULT_DEPTH, SearchCancelled, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and invoke :meth:`request_move` through a queued
    signal; results come back through the signals below, tagged with the
    caller's request id.
    """

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_limits")

    def __init__(
        self,
        *,
        max_depth: int = DEFAULT_DEPTH,
        use_transposition_table: bool = True,
    ) -> None:
        super().__init__()
        self._engine = MinimaxSearchEngine()
        self._limits = SearchLimits(
            max_depth=max_depth,
            use_transposition_table=use_transposition_table,
        )
        self._cancel_event = threading.Event()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, state_obj: object, request_id: int) -> None:
        """Search for the best move in *state_obj* and emit the result."""
        if not isinstance(state_obj, GameState):
            self.search_error.emit(request_id, "Engine received invalid game state")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                state_obj,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except SearchCancelled:
            self.search_cancelled.emit(request_id)
            return
        except NoLegalMove:
            self.search_no_move.emit(request_id)
            return
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

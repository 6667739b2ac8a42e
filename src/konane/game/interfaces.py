"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the GameController and any UI depend on
these ABCs, not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from konane.core.enums import Color

if TYPE_CHECKING:
    from konane.core.move import Jump, Move
    from konane.core.state import GameState
    from konane.core.types import Position


# ── UI input events ──────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PositionSelected:
    """A cell was picked; during the opening this names the removal."""

    position: Position


@dataclass(frozen=True, slots=True)
class JumpSelected:
    """A complete jump was picked."""

    jump: Jump


@dataclass(frozen=True, slots=True)
class InputCancelled:
    """The pending selection was withdrawn."""


PlayerInput: TypeAlias = PositionSelected | JumpSelected | InputCancelled


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, state: GameState) -> Move | None:
        """Return a move once one is available, ``None`` until then.

        Humans hand over what their input produced. AI players either
        search on the spot or start a background search and answer on a
        later call.
        """

    @abstractmethod
    def receive_input(self, event: PlayerInput) -> None:
        """Deliver a UI selection. Ignored by AI players."""

    @abstractmethod
    def is_ready(self) -> bool:
        """Whether :meth:`request_move` would return a move right now."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop a pending move or abandon a running computation."""

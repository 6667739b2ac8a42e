"""Rule-engine error kinds.

Every error here is local and non-retryable: the caller has to pick a
different action rather than repeat the same one.
"""

from __future__ import annotations


class KonaneError(Exception):
    """Base class for all Kōnane rule errors."""


class InvalidPhase(KonaneError):
    """Operation attempted outside the phase that permits it."""


class IllegalRemoval(KonaneError):
    """Opening removal target is not in the legal set."""


class IllegalMove(KonaneError):
    """Jump is not currently legal (stale, wrong mover, or malformed)."""


class NoLegalMove(KonaneError):
    """Search was asked to move in a position without legal moves."""


class MalformedRecord(KonaneError):
    """An imported game record failed validation on replay."""

"""
Collaborator failure types.

Ingestion sources translate transport, protocol and parse failures into these
errors so callers can tell "could not look up holdings" apart from "could not
build a candidate pool".  The original exception is always chained.
"""

from __future__ import annotations


class OwnershipLookupError(RuntimeError):
    """Raised when a holder's owned assets cannot be fetched.

    Attributes:
        holder_id: Holder whose lookup failed.
        reason:    Short human-readable cause.
    """

    def __init__(self, holder_id: str, reason: str) -> None:
        self.holder_id = holder_id
        self.reason    = reason
        super().__init__(f"Ownership lookup failed for '{holder_id}': {reason}")


class CandidatePoolError(RuntimeError):
    """Raised when the candidate pool cannot be fetched.

    Attributes:
        reason: Short human-readable cause.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Candidate pool unavailable: {reason}")

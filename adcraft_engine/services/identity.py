"""
Caller identity checks for the generation endpoint.

The endpoint only needs to know whether a caller identity is attached.
Real and mock auth backends both plug in behind IdentityVerifier, so the
dispatcher never has to know which one is serving it.
"""
from abc import ABC, abstractmethod
from typing import Optional


class IdentityVerifier(ABC):
    """Resolves the caller identity attached to a request"""

    @abstractmethod
    def verify(self, uid: Optional[str]) -> Optional[str]:
        """Return the verified identity, or None when there is none."""


class PresenceIdentityVerifier(IdentityVerifier):
    """Pass-through gate: any non-blank uid is accepted as-is."""

    def verify(self, uid: Optional[str]) -> Optional[str]:
        if uid is None:
            return None
        uid = uid.strip()
        return uid or None

"""Two-slot session context for the source and target accounts.

A transfer always involves exactly one "source" account and one "target"
account. The session holds their credentials explicitly and is handed to the
orchestrator, instead of the orchestrator reading them from ambient storage.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import SpotifyTokenMissing
from .models import Credential

SOURCE = "source"
TARGET = "target"
SLOTS = (SOURCE, TARGET)


def _check_slot(slot: str) -> None:
    if slot not in SLOTS:
        raise ValueError(f"Unknown account slot {slot!r} (expected one of {SLOTS}).")


@dataclass
class SessionContext:
    source: Optional[Credential] = None
    target: Optional[Credential] = None

    @classmethod
    def from_tokens(
        cls,
        source_token: Optional[str] = None,
        target_token: Optional[str] = None,
    ) -> "SessionContext":
        return cls(
            source=Credential(access_token=source_token) if source_token else None,
            target=Credential(access_token=target_token) if target_token else None,
        )

    def set(self, slot: str, credential: Credential) -> None:
        _check_slot(slot)
        setattr(self, slot, credential)

    def get(self, slot: str) -> Optional[Credential]:
        _check_slot(slot)
        return getattr(self, slot)

    def require(self, slot: str) -> Credential:
        credential = self.get(slot)
        if credential is None or not credential.access_token:
            raise SpotifyTokenMissing(f"No {slot} account is logged in.")
        return credential

    def clear(self, slot: Optional[str] = None) -> None:
        """Log out one account, or both when slot is None."""
        if slot is None:
            self.source = None
            self.target = None
            return
        _check_slot(slot)
        setattr(self, slot, None)

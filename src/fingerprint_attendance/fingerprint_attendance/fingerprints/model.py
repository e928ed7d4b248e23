from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Fingerprint:
    """Opaque sensor code linked 1:1 to a user. No matching happens here."""

    finger_id: int
    finger_code: str
    user_id: int

from __future__ import annotations

from typing import Optional, Protocol

from .model import Fingerprint


class FingerprintRepository(Protocol):
    def get_for_user(self, user_id: int) -> Optional[Fingerprint]:
        raise NotImplementedError

    def get_by_code(self, finger_code: str) -> Optional[Fingerprint]:
        raise NotImplementedError

    def create(self, *, user_id: int, finger_code: str) -> int:
        raise NotImplementedError

    def update_code(self, *, finger_id: int, finger_code: str) -> bool:
        raise NotImplementedError

    def delete_for_user(self, user_id: int) -> int:
        raise NotImplementedError

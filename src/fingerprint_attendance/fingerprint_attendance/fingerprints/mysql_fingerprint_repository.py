from __future__ import annotations

from typing import Optional

from ..database.mysql_base import fetchone
from .model import Fingerprint
from .repository import FingerprintRepository


def _to_fingerprint(row) -> Fingerprint:
    return Fingerprint(
        finger_id=int(row["finger_id"]),
        finger_code=row["finger_code"],
        user_id=int(row["user_id"]),
    )


class MySQLFingerprintRepository(FingerprintRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_for_user(self, user_id: int) -> Optional[Fingerprint]:
        self._cur.execute(
            "SELECT finger_id, finger_code, user_id FROM fingerprints WHERE user_id=%s",
            (int(user_id),),
        )
        row = fetchone(self._cur)
        return _to_fingerprint(row) if row else None

    def get_by_code(self, finger_code: str) -> Optional[Fingerprint]:
        self._cur.execute(
            "SELECT finger_id, finger_code, user_id FROM fingerprints WHERE finger_code=%s",
            (finger_code,),
        )
        row = fetchone(self._cur)
        return _to_fingerprint(row) if row else None

    def create(self, *, user_id: int, finger_code: str) -> int:
        self._cur.execute(
            "INSERT INTO fingerprints(user_id, finger_code) VALUES(%s,%s)",
            (int(user_id), finger_code),
        )
        return int(self._cur.lastrowid)

    def update_code(self, *, finger_id: int, finger_code: str) -> bool:
        self._cur.execute(
            "UPDATE fingerprints SET finger_code=%s WHERE finger_id=%s",
            (finger_code, int(finger_id)),
        )
        return self._cur.rowcount > 0

    def delete_for_user(self, user_id: int) -> int:
        self._cur.execute("DELETE FROM fingerprints WHERE user_id=%s", (int(user_id),))
        return int(self._cur.rowcount)

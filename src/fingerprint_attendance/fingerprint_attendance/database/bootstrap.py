from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterable, List

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger(__name__)

_CREATE_DB_RE = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_RE = re.compile(r"(?im)^\s*USE\b.*?;\s*$")


def db_config_from_dict(db_config: dict) -> DBConfig:
    return DBConfig(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "attendance_db")),
    )


def _connect(config: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=config.host, port=config.port, user=config.user, password=config.password, use_pure=True)
    if with_database:
        kwargs["database"] = config.database
    return mysql.connector.connect(**kwargs)


def strip_database_statements(sql: str) -> str:
    """Drop CREATE DATABASE / USE lines so a script runs against the configured database."""

    return _USE_RE.sub("", _CREATE_DB_RE.sub("", sql))


def split_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside quoted strings; ``--`` comment lines are dropped."""

    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    buf: List[str] = []
    quote = ""
    escape = False

    for ch in "\n".join(lines):
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    config = db_config_from_dict(db_config)
    with closing(_connect(config, with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def run_sql_file(db_config: dict, path: str | Path) -> int:
    config = db_config_from_dict(db_config)
    sql = strip_database_statements(Path(path).read_text(encoding="utf-8"))
    count = 0
    with closing(_connect(config)) as conn:
        cur = conn.cursor()
        for stmt in split_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    logger.info("Applied %s statements from %s", count, path)
    return count


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    run_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    run_sql_file(db_config, seed_path)


def ensure_demo_admin(db_config: dict, *, email: str, password: str) -> None:
    """Create the demo administrator, or reset its password if it already exists."""

    config = db_config_from_dict(db_config)
    password_hash = generate_password_hash(password)
    with closing(_connect(config)) as conn:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
        row = cur.fetchone()
        if row:
            cur.execute("UPDATE admins SET password_hash=%s WHERE user_id=%s", (password_hash, row["user_id"]))
            cur.execute("UPDATE users SET active=1 WHERE user_id=%s", (row["user_id"],))
        else:
            cur.execute(
                "INSERT INTO users(name, surname, email, role, active) VALUES(%s,%s,%s,%s,1)",
                ("Admin", "Demo", email, Role.ADMIN.value),
            )
            cur.execute(
                "INSERT INTO admins(user_id, password_hash) VALUES(%s,%s)",
                (int(cur.lastrowid), password_hash),
            )
        conn.commit()
    logger.info("Demo admin ready: %s", email)


def list_tables(db_config: dict) -> List[str]:
    config = db_config_from_dict(db_config)
    with closing(_connect(config)) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]

"""Schema and seed helpers used by ``create_app`` and the scripts/ folder."""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[4]
SCHEMA_PATH = REPO_ROOT / "database" / "schema.sql"
SEED_PATH = REPO_ROOT / "database" / "seed.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql must work regardless of the configured database name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside of quoted strings."""
    buf: list[str] = []
    quote = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connection(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(db_config))


def _run_script(db_config: dict, path: str | Path) -> int:
    sql = _strip_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    count = 0
    with closing(_connection(db_config).connect()) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    return count


def ensure_database_exists(db_config: dict) -> None:
    conn_factory = _connection(db_config)
    name = conn_factory.config.database
    with closing(conn_factory.connect(with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, schema_path)
    logger.info("Applied %s (%d statements)", Path(schema_path).name, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path = SEED_PATH) -> None:
    count = _run_script(db_config, seed_path)
    logger.info("Applied %s (%d statements)", Path(seed_path).name, count)


def ensure_admin_user(db_config: dict, *, email: str = "admin@adrs.com", password: str = "admin123") -> None:
    """Create or reset the bootstrap admin account."""
    password_hash = generate_password_hash(password)
    with closing(_connection(db_config).connect()) as conn:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
        if cur.fetchone():
            cur.execute(
                "UPDATE users SET password_hash=%s, role='admin', is_active=1 WHERE email=%s",
                (password_hash, email),
            )
        else:
            cur.execute(
                """
                INSERT INTO users (email, name, password_hash, role, is_active)
                VALUES (%s, %s, %s, 'admin', 1)
                """,
                (email, "Administrator", password_hash),
            )
        conn.commit()


def list_tables(db_config: dict) -> list[str]:
    with closing(_connection(db_config).connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]


def ensure_demo_users(db_config: dict, *, password: str = "password123") -> int:
    """Give every seeded employee and intern a login, linked by id.

    Employees sign in with their login email, interns with their own email.
    Existing accounts are left alone. Returns the number of accounts created.
    """
    ensure_admin_user(db_config)
    password_hash = generate_password_hash(password)
    created = 0
    with closing(_connection(db_config).connect()) as conn:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT employee_id, name, COALESCE(login_email, email) AS email FROM employees")
        people = [("employee", r["employee_id"], None, r) for r in cur.fetchall()]
        cur.execute("SELECT intern_id, name, email FROM interns")
        people += [("intern", None, r["intern_id"], r) for r in cur.fetchall()]

        for role, employee_id, intern_id, r in people:
            cur.execute(
                """
                INSERT IGNORE INTO users (email, name, password_hash, role, employee_id, intern_id, is_active)
                VALUES (%s, %s, %s, %s, %s, %s, 1)
                """,
                (r["email"], r["name"], password_hash, role, employee_id, intern_id),
            )
            created += cur.rowcount
        conn.commit()
    return created

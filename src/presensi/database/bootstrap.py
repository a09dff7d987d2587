from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, NamedTuple

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parent / "sql"
SCHEMA_PATH = SQL_DIR / "schema.sql"
SEED_PATH = SQL_DIR / "seed.sql"


class DemoUser(NamedTuple):
    user_id: str
    username: str
    password: str
    name: str
    role: str
    department: str
    position: str
    email: str
    phone: str


DEMO_USERS = (
    DemoUser("admin-001", "admin", "admin123", "Administrator HR", "admin",
             "Human Resources", "HR Manager", "admin@lestaribumi.co.id", "081234567890"),
    DemoUser("emp-001", "budi", "budi123", "Budi Santoso", "employee",
             "Operations", "Field Supervisor", "budi@lestaribumi.co.id", "081234567891"),
    DemoUser("emp-002", "siti", "siti123", "Siti Rahayu", "employee",
             "Operations", "Field Staff", "siti@lestaribumi.co.id", "081234567892"),
    DemoUser("emp-003", "agus", "agus123", "Agus Wijaya", "employee",
             "Engineering", "Technician", "agus@lestaribumi.co.id", "081234567893"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside quoted strings."""
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(conn_factory: DatabaseConnection, sql: str) -> None:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(_strip_line_comments(_strip_create_db_and_use(sql))):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    sql = Path(schema_path).read_text(encoding="utf-8")
    _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), sql)
    logger.info("Schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path = SEED_PATH) -> None:
    sql = Path(seed_path).read_text(encoding="utf-8")
    _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), sql)
    logger.info("Seed applied from %s", seed_path)


def ensure_demo_users(db_config: dict, users: Iterable[DemoUser] = DEMO_USERS) -> None:
    """Insert demo accounts, or reset their password and profile if present."""
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        for u in users:
            cur.execute(
                """
                INSERT INTO users (id, username, password, name, role, department, position, email, phone, is_active)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, 1)
                ON DUPLICATE KEY UPDATE
                    password=VALUES(password), name=VALUES(name), role=VALUES(role),
                    department=VALUES(department), position=VALUES(position),
                    email=VALUES(email), phone=VALUES(phone), is_active=1
                """,
                (
                    u.user_id,
                    u.username,
                    generate_password_hash(u.password),
                    u.name,
                    u.role,
                    u.department,
                    u.position,
                    u.email,
                    u.phone,
                ),
            )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo users ready")


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

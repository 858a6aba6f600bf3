from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[4]
SCHEMA_PATH = REPO_ROOT / "database" / "schema.sql"
SEED_PATH = REPO_ROOT / "database" / "seed.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ';' outside of quoted literals."""
    start = 0
    quote = ""
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _run_script(conn_factory: DatabaseConnection, sql: str) -> int:
    sql = _strip_line_comments(_strip_create_db_and_use(sql))
    conn = conn_factory.connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    sql = Path(schema_path).read_text(encoding="utf-8")
    count = _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), sql)
    logger.info("Applied %s (%d statements)", Path(schema_path).name, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path = SEED_PATH) -> None:
    sql = Path(seed_path).read_text(encoding="utf-8")
    count = _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), sql)
    logger.info("Applied %s (%d statements)", Path(seed_path).name, count)


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

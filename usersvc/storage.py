"""SQLite access with query logging."""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Sequence

from usersvc.config import DBConfig
from usersvc.logger import Logger

# Quoted literals are matched first so that "$N" inside them is left alone.
_PLACEHOLDER = re.compile(r"""('(?:[^']|'')*'|"(?:[^"]|"")*")|\$(\d+)""")


def _positional(sql: str) -> str:
    """Rewrite "$N" placeholders as SQLite's numbered "?N" form."""
    return _PLACEHOLDER.sub(
        lambda m: m.group(1) if m.group(1) is not None else f"?{m.group(2)}", sql
    )


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Query:
    """A named SQL statement with its positional arguments."""

    name: str
    sql: str
    args: Sequence[Any] = field(default_factory=tuple)

    def __str__(self) -> str:
        text = f"sql: {self.name}: query: {self.sql}"
        for number, value in enumerate(self.args, start=1):
            text = text.replace(f"${number}", _format_value(value), 1)
        return text


class Database:
    """An SQLite connection that logs every statement at debug level."""

    def __init__(self, log: Logger, dsn: str) -> None:
        self._log = log
        self.dsn = dsn
        try:
            self._conn = sqlite3.connect(dsn, isolation_level=None, check_same_thread=False)
            self._conn.execute("SELECT 1")
        except sqlite3.Error:
            log.fatal("error connect to database")

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _run(self, query: Query) -> sqlite3.Cursor:
        self._log.debug(str(query))
        return self._conn.execute(_positional(query.sql), tuple(query.args))

    def execute(self, query: Query) -> sqlite3.Cursor:
        """Run a statement; the cursor carries rowcount and lastrowid."""
        return self._run(query)

    def query(self, query: Query) -> sqlite3.Cursor:
        """Run a query and return a cursor over its rows."""
        return self._run(query)

    def query_row(self, query: Query) -> tuple:
        """Return the first row of a query; raise LookupError if there is none."""
        row = self._run(query).fetchone()
        if row is None:
            raise LookupError("sql: no rows in result set")
        return row

    def close(self) -> None:
        self._conn.close()


def connect(log: Logger, config: DBConfig) -> Database:
    """Open the database the configuration points at."""
    return Database(log, config.dsn())
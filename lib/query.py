"""
Query runner - one parameterized statement per pooled connection checkout
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from lib.db import Database
from lib.prometheus_metrics import track_database_query

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """Rows for reads, affected row count for writes"""

    rows: List[Dict[str, Any]] = field(default_factory=list)
    affected_rows: int = 0
    status: str = ""

    @property
    def first(self):
        return self.rows[0] if self.rows else None


def _affected_rows(status: str) -> int:
    """Row count from a command tag such as 'UPDATE 1' or 'INSERT 0 1'"""
    parts = (status or "").split()
    if parts and parts[-1].isdigit():
        return int(parts[-1])
    return 0


def _query_type(sql: str) -> str:
    words = sql.split(None, 1)
    return words[0].lower() if words else "unknown"


class QueryRunner:
    """Runs statements against a Database; no transaction spans two calls"""

    def __init__(self, database: Database):
        self.database = database

    async def run(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        """
        Execute `sql` with positional bind values ($1..$n).

        The connection goes back to the pool whether the statement succeeds,
        fails, or the calling task is cancelled. Errors propagate unchanged.
        """
        params = tuple(params)
        async with self.database.connection() as conn:
            try:
                with track_database_query(_query_type(sql)):
                    stmt = await conn.prepare(sql)
                    records = await stmt.fetch(*params)
            except Exception as e:
                logger.error(f"Statement failed ({type(e).__name__}): {e}")
                raise
            status = stmt.get_statusmsg()

        return QueryResult(
            rows=[dict(r) for r in records],
            affected_rows=_affected_rows(status),
            status=status
        )

"""
Partial update builder - UPDATE ... SET for only the fields a caller supplied
"""
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple

from lib.errors import NoUpdatableFieldsError


@dataclass(frozen=True)
class Statement:
    sql: str
    params: Tuple[Any, ...]


def quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class PartialUpdateBuilder:
    """
    Builds a single-row UPDATE for a table with a closed set of updatable columns.

    Fields are visited in the declared order, never in the order of the incoming
    mapping, so the SET clause and its bind values are deterministic. A candidate
    counts as supplied only when it is truthy: an empty string, zero or None is
    treated as absent. Setting a column to '' or 0 therefore needs a full replace.
    """

    def __init__(self, table: str, key_column: str, fields: Sequence[str]):
        if not fields:
            raise ValueError("at least one updatable field is required")
        if key_column in fields:
            raise ValueError(f"key column {key_column} cannot be updatable")
        self.table = table
        self.key_column = key_column
        self.fields = tuple(fields)

    def build(self, identifier: Any, candidates: Mapping[str, Any]) -> Statement:
        assignments = []
        params = []
        for name in self.fields:
            value = candidates.get(name)
            if not value:
                continue
            params.append(value)
            assignments.append(f"{quote_ident(name)} = ${len(params)}")

        if not assignments:
            raise NoUpdatableFieldsError()

        params.append(identifier)
        sql = (
            f"UPDATE {quote_ident(self.table)} "
            f"SET {', '.join(assignments)} "
            f"WHERE {quote_ident(self.key_column)} = ${len(params)}"
        )
        return Statement(sql=sql, params=tuple(params))

"""
RecipeShare Backend - Shared Query Helpers
==========================================

What:  Column allow-list resolution, row → record mapping and the common
       "run one SELECT, return records" executor body.
Who:   Every service module in this package.

Column allow-lists:
    Callers may narrow a SELECT with `?columns=a,b,c`. Each name is matched
    case-insensitively against a fixed mapping of public field names to
    column expressions; a leading table alias is ignored, so `r.Cuisine`,
    `cuisine` and `Cuisine` all resolve to the same column. Anything else is
    rejected with ValidationError, so no caller text ever reaches the SQL.
"""

from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from recipeshare.database import Database
from recipeshare.exceptions import ValidationError
from recipeshare.schemas.recipe import format_cooking_time

Record = Dict[str, Any]


def resolve_columns(
    requested: Optional[Sequence[str]],
    allowed: Mapping[str, ColumnElement],
    default: Sequence[str],
) -> List[ColumnElement]:
    """
    Turn requested public names into labelled column expressions.

    Args:
        requested: Names from the caller, or None/empty for the default set
        allowed:   Public name → column expression
        default:   Public names used when nothing was requested

    Returns:
        Labelled columns in request order, duplicates removed.

    Raises:
        ValidationError: at least one name is not in `allowed`
    """
    lookup = {name.lower(): name for name in allowed}
    selected: List[str] = []
    unknown: List[str] = []

    for raw in requested or ():
        key = raw.strip().rsplit(".", 1)[-1].lower()
        if not key:
            continue
        name = lookup.get(key)
        if name is None:
            unknown.append(raw.strip())
        elif name not in selected:
            selected.append(name)

    if unknown:
        raise ValidationError(
            message=(
                f"Unknown column(s): {', '.join(unknown)}. "
                f"Allowed: {', '.join(allowed)}"
            ),
            field="columns",
            context={"unknown": unknown},
        )

    names = selected or list(default)
    return [allowed[name].label(name) for name in names]


def to_record(row: Mapping[str, Any]) -> Record:
    """Copy a result row into a plain dict, rendering intervals as text."""
    record = {}
    for key, value in row.items():
        if isinstance(value, timedelta):
            value = format_cooking_time(value)
        record[key] = value
    return record


async def fetch_records(db: Database, stmt: Select) -> List[Record]:
    """Execute a SELECT on a borrowed session and map every row."""

    async def run(session: AsyncSession) -> List[Record]:
        result = await session.execute(stmt)
        return [to_record(row) for row in result.mappings()]

    return await db.with_connection(run)

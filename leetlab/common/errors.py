"""
Data-layer exceptions and translation of driver integrity errors.

Storage constraints are enforced by the database. This module turns the
driver-specific ``IntegrityError`` raised on flush into one of the
exceptions below so callers can handle them without knowing the backend.
"""

import logging
import re
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import Base

logger = logging.getLogger(__name__)

PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"

_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)")


class LeetLabError(Exception):
    """Base class for data-layer errors."""

    pass


class NotFoundError(LeetLabError):
    """Raised when a requested row does not exist."""

    entity = "Entity"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"{self.entity} {entity_id} not found")


class UserNotFoundError(NotFoundError):
    entity = "User"


class ProblemNotFoundError(NotFoundError):
    entity = "Problem"


class SubmissionNotFoundError(NotFoundError):
    entity = "Submission"


class PlaylistNotFoundError(NotFoundError):
    entity = "Playlist"


class UniqueConstraintViolation(LeetLabError):
    """
    Raised when a write would duplicate a unique field set.

    Attributes:
        table: Table holding the constraint, if known
        fields: Column names making up the violated constraint
    """

    def __init__(self, table: Optional[str], fields: tuple[str, ...]):
        self.table = table
        self.fields = fields
        super().__init__(
            f"Unique constraint violated on {table or '?'} "
            f"({', '.join(fields) or 'unknown fields'})"
        )


class ForeignKeyViolation(LeetLabError):
    """Raised when a row references a parent that does not exist."""

    def __init__(self, table: Optional[str], detail: str = ""):
        self.table = table
        self.detail = detail
        message = f"Foreign key violated on {table or '?'}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def _unique_constraints() -> dict[str, tuple[str, tuple[str, ...]]]:
    """Map constraint name to (table, columns) for every declared unique."""
    constraints = {}
    for table in Base.metadata.tables.values():
        for constraint in table.constraints:
            if isinstance(constraint, UniqueConstraint) and constraint.name:
                constraints[str(constraint.name)] = (
                    table.name,
                    tuple(column.name for column in constraint.columns)
                )
    return constraints


def _sqlstate(orig: BaseException) -> Optional[str]:
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _constraint_name(orig: BaseException) -> Optional[str]:
    diag = getattr(orig, "diag", None)
    return getattr(diag, "constraint_name", None) if diag else None


def _table_name(orig: BaseException) -> Optional[str]:
    diag = getattr(orig, "diag", None)
    return getattr(diag, "table_name", None) if diag else None


def translate_integrity_error(
    exc: IntegrityError,
    table: Optional[str] = None
) -> LeetLabError:
    """
    Convert a driver IntegrityError into a data-layer exception.

    Args:
        exc: Error raised by SQLAlchemy on flush
        table: Table being written, used when the driver does not say

    Returns:
        UniqueConstraintViolation or ForeignKeyViolation

    Raises:
        IntegrityError: The original error if it is neither kind
    """
    orig = exc.orig
    message = str(orig)
    sqlstate = _sqlstate(orig)

    if sqlstate == PG_UNIQUE_VIOLATION:
        name = _constraint_name(orig)
        known = _unique_constraints().get(name or "")
        if known:
            return UniqueConstraintViolation(known[0], known[1])
        return UniqueConstraintViolation(_table_name(orig) or table, ())

    if sqlstate == PG_FOREIGN_KEY_VIOLATION:
        return ForeignKeyViolation(_table_name(orig) or table, message)

    match = _SQLITE_UNIQUE_RE.search(message)
    if match:
        qualified = [
            part.strip() for part in match.group("columns").split(",")
        ]
        tables = {part.split(".", 1)[0] for part in qualified}
        fields = tuple(part.split(".", 1)[-1] for part in qualified)
        return UniqueConstraintViolation(
            tables.pop() if len(tables) == 1 else table,
            fields
        )

    if "FOREIGN KEY constraint failed" in message:
        return ForeignKeyViolation(table)

    raise exc


@contextmanager
def integrity_guard(
    db: Session,
    table: Optional[str] = None
) -> Generator[None, None, None]:
    """
    Roll back and translate integrity errors raised inside the block.

    Args:
        db: Session whose unit of work is being flushed
        table: Table being written, for error reporting

    Raises:
        UniqueConstraintViolation: On duplicate unique field set
        ForeignKeyViolation: On reference to a missing parent row
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        error = translate_integrity_error(e, table)
        logger.warning(f"Integrity error: {error}")
        raise error from e

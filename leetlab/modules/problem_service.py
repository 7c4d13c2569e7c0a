"""
Problem and solved-problem data access.
"""

import logging
from typing import Optional

from sqlalchemy import ColumnElement, cast
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Session

from ..common.errors import (
    ProblemNotFoundError,
    UniqueConstraintViolation,
    integrity_guard,
)
from ..common.models import Difficulty, Problem, ProblemSolved
from ..common.schemas import ProblemCreate, ProblemUpdate

logger = logging.getLogger(__name__)

_NULLABLE_FIELDS = {"hints", "editorial"}


def create_problem(db: Session, data: ProblemCreate) -> Problem:
    """
    Create a problem authored by ``data.user_id``.

    Args:
        db: Database session
        data: Validated problem fields

    Returns:
        Created problem instance

    Raises:
        ForeignKeyViolation: If the author doesn't exist
    """
    problem = Problem(**data.model_dump())

    with integrity_guard(db, Problem.__tablename__):
        db.add(problem)
        db.commit()
    db.refresh(problem)

    logger.info(f"Created problem {problem.id} by {problem.user_id}")
    return problem


def get_problem(db: Session, problem_id: str) -> Optional[Problem]:
    """Retrieve problem by ID, or None."""
    return db.query(Problem).filter(Problem.id == problem_id).first()


def require_problem(db: Session, problem_id: str) -> Problem:
    """
    Retrieve problem by ID.

    Raises:
        ProblemNotFoundError: If problem doesn't exist
    """
    problem = get_problem(db, problem_id)
    if not problem:
        raise ProblemNotFoundError(problem_id)
    return problem


def list_problems(
    db: Session,
    difficulty: Optional[Difficulty] = None,
    tag: Optional[str] = None
) -> list[Problem]:
    """
    List problems, optionally filtered by difficulty and tag.

    Args:
        db: Database session
        difficulty: Only problems of this difficulty
        tag: Only problems carrying this tag

    Returns:
        Matching problems, oldest first
    """
    query = db.query(Problem)
    if difficulty is not None:
        query = query.filter(Problem.difficulty == Difficulty(difficulty))

    match_in_python = False
    if tag is not None:
        if db.get_bind().dialect.name == "postgresql":
            query = query.filter(tag_filter(tag))
        else:
            match_in_python = True

    problems = query.order_by(Problem.created_at, Problem.id).all()

    # SQLite has no JSON containment operator
    if match_in_python:
        problems = [p for p in problems if tag in (p.tags or [])]
    return problems


def tag_filter(tag: str) -> ColumnElement[bool]:
    """PostgreSQL clause matching problems whose tags contain ``tag``."""
    return cast(Problem.tags, JSONB).contains([tag])


def list_problems_by_author(db: Session, user_id: str) -> list[Problem]:
    """List problems authored by a user."""
    return db.query(Problem).filter(
        Problem.user_id == user_id
    ).order_by(Problem.created_at, Problem.id).all()


def update_problem(
    db: Session,
    problem_id: str,
    data: ProblemUpdate
) -> Problem:
    """
    Apply changes to an existing problem.

    Raises:
        ProblemNotFoundError: If problem doesn't exist
    """
    problem = require_problem(db, problem_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field not in _NULLABLE_FIELDS:
            continue
        setattr(problem, field, value)

    with integrity_guard(db, Problem.__tablename__):
        db.commit()
    db.refresh(problem)

    logger.info(f"Updated problem {problem_id}")
    return problem


def delete_problem(db: Session, problem_id: str) -> None:
    """
    Delete a problem.

    Submissions, solved records and playlist entries for the problem go
    with it; the author and the playlists themselves remain.

    Raises:
        ProblemNotFoundError: If problem doesn't exist
    """
    problem = require_problem(db, problem_id)

    with integrity_guard(db, Problem.__tablename__):
        db.delete(problem)
        db.commit()

    logger.info(f"Deleted problem {problem_id}")


def create_problem_solved(
    db: Session,
    user_id: str,
    problem_id: str
) -> ProblemSolved:
    """
    Record that a user solved a problem.

    Raises:
        UniqueConstraintViolation: If the record already exists
        ForeignKeyViolation: If user or problem doesn't exist
    """
    solved = ProblemSolved(user_id=user_id, problem_id=problem_id)

    with integrity_guard(db, ProblemSolved.__tablename__):
        db.add(solved)
        db.commit()
    db.refresh(solved)

    logger.info(f"User {user_id} solved problem {problem_id}")
    return solved


def get_problem_solved(
    db: Session,
    user_id: str,
    problem_id: str
) -> Optional[ProblemSolved]:
    return db.query(ProblemSolved).filter(
        ProblemSolved.user_id == user_id,
        ProblemSolved.problem_id == problem_id
    ).first()


def mark_problem_solved(
    db: Session,
    user_id: str,
    problem_id: str
) -> ProblemSolved:
    """
    Record that a user solved a problem, keeping any existing record.

    Returns:
        The existing or newly created record
    """
    existing = get_problem_solved(db, user_id, problem_id)
    if existing:
        return existing

    try:
        return create_problem_solved(db, user_id, problem_id)
    except UniqueConstraintViolation:
        # another session recorded it between the check and the insert
        existing = get_problem_solved(db, user_id, problem_id)
        if existing is None:
            raise
        logger.info(f"Problem {problem_id} already solved by {user_id}")
        return existing


def list_solved_problems(db: Session, user_id: str) -> list[Problem]:
    """List problems the user has solved, in the order they were solved."""
    return db.query(Problem).join(
        ProblemSolved,
        ProblemSolved.problem_id == Problem.id
    ).filter(
        ProblemSolved.user_id == user_id
    ).order_by(ProblemSolved.created_at, Problem.id).all()

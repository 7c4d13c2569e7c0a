"""
Submission and test case result data access.

Judging happens elsewhere; this module only records what the judge
reports.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..common.errors import SubmissionNotFoundError, integrity_guard
from ..common.models import Submission, TestCaseResult
from ..common.schemas import (
    SubmissionCreate,
    SubmissionUpdate,
    TestCaseResultCreate,
)

logger = logging.getLogger(__name__)


def create_submission(
    db: Session,
    data: SubmissionCreate,
    test_case_results: Sequence[TestCaseResultCreate] = ()
) -> Submission:
    """
    Record a submission and its per-test-case results in one transaction.

    Args:
        db: Database session
        data: Validated submission fields
        test_case_results: Results reported by the judge, if any

    Returns:
        Created submission instance

    Raises:
        ForeignKeyViolation: If the user or problem doesn't exist
    """
    submission = Submission(**data.model_dump())
    submission.test_case_results = [
        TestCaseResult(**result.model_dump())
        for result in test_case_results
    ]

    with integrity_guard(db, Submission.__tablename__):
        db.add(submission)
        db.commit()
    db.refresh(submission)

    logger.info(
        f"Created submission {submission.id} for {submission.problem_id} "
        f"with {len(test_case_results)} test case results"
    )
    return submission


def get_submission(db: Session, submission_id: str) -> Optional[Submission]:
    """Retrieve submission by ID, or None."""
    return db.query(Submission).filter(
        Submission.id == submission_id
    ).first()


def require_submission(db: Session, submission_id: str) -> Submission:
    """
    Retrieve submission by ID.

    Raises:
        SubmissionNotFoundError: If submission doesn't exist
    """
    submission = get_submission(db, submission_id)
    if not submission:
        raise SubmissionNotFoundError(submission_id)
    return submission


def list_submissions(
    db: Session,
    user_id: Optional[str] = None,
    problem_id: Optional[str] = None
) -> list[Submission]:
    """
    List submissions, newest first.

    Args:
        db: Database session
        user_id: Only submissions by this user
        problem_id: Only submissions for this problem
    """
    query = db.query(Submission)
    if user_id is not None:
        query = query.filter(Submission.user_id == user_id)
    if problem_id is not None:
        query = query.filter(Submission.problem_id == problem_id)
    return query.order_by(
        Submission.created_at.desc(),
        Submission.id
    ).all()


def count_submissions_for_problem(db: Session, problem_id: str) -> int:
    """Count submissions made for a problem across all users."""
    return db.query(func.count(Submission.id)).filter(
        Submission.problem_id == problem_id
    ).scalar() or 0


def update_submission(
    db: Session,
    submission_id: str,
    data: SubmissionUpdate
) -> Submission:
    """
    Record execution output on an existing submission.

    Raises:
        SubmissionNotFoundError: If submission doesn't exist
    """
    submission = require_submission(db, submission_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field == "status":
            continue
        setattr(submission, field, value)

    with integrity_guard(db, Submission.__tablename__):
        db.commit()
    db.refresh(submission)

    logger.info(f"Updated submission {submission_id}: {submission.status}")
    return submission


def delete_submission(db: Session, submission_id: str) -> None:
    """
    Delete a submission and its test case results.

    Raises:
        SubmissionNotFoundError: If submission doesn't exist
    """
    submission = require_submission(db, submission_id)

    with integrity_guard(db, Submission.__tablename__):
        db.delete(submission)
        db.commit()

    logger.info(f"Deleted submission {submission_id}")


def add_test_case_result(
    db: Session,
    submission_id: str,
    data: TestCaseResultCreate
) -> TestCaseResult:
    """
    Attach one test case result to an existing submission.

    Raises:
        ForeignKeyViolation: If the submission doesn't exist
    """
    result = TestCaseResult(submission_id=submission_id, **data.model_dump())

    with integrity_guard(db, TestCaseResult.__tablename__):
        db.add(result)
        db.commit()
    db.refresh(result)

    logger.info(
        f"Recorded test case {result.test_case} for submission "
        f"{submission_id}: {result.status}"
    )
    return result


def list_test_case_results(
    db: Session,
    submission_id: str
) -> list[TestCaseResult]:
    """List a submission's test case results ordered by test case index."""
    return db.query(TestCaseResult).filter(
        TestCaseResult.submission_id == submission_id
    ).order_by(TestCaseResult.test_case).all()

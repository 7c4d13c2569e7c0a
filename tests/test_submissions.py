"""
Submission and test case result data access tests.
"""

import pytest
from pydantic import ValidationError

from leetlab.common.errors import (
    ForeignKeyViolation,
    SubmissionNotFoundError,
)
from leetlab.common.models import Submission, TestCaseResult
from leetlab.common.schemas import (
    SubmissionCreate,
    SubmissionUpdate,
    TestCaseResultCreate,
)
from leetlab.modules import submission_service


def _submission(user_id, problem_id, **overrides):
    fields = {
        "user_id": user_id,
        "problem_id": problem_id,
        "source_code": {"PYTHON": "a, b = map(int, input().split())\n"
                                  "print(a + b)\n"},
        "language": "PYTHON",
        "stdin": "1 2\n5 7",
        "status": "Accepted",
    }
    fields.update(overrides)
    return SubmissionCreate(**fields)


def _result(index, passed=True, **overrides):
    fields = {
        "test_case": index,
        "passed": passed,
        "stdout": "3",
        "expected": "3",
        "status": "Accepted" if passed else "Wrong Answer",
        "memory": "9.2 MB",
        "time": "0.01 s",
    }
    fields.update(overrides)
    return TestCaseResultCreate(**fields)


@pytest.fixture
def author_and_problem(make_user, make_problem):
    author = make_user()
    return author, make_problem(author)


def test_create_submission_with_results(db, author_and_problem):
    user, problem = author_and_problem

    submission = submission_service.create_submission(
        db,
        _submission(user.id, problem.id),
        test_case_results=[_result(2, passed=False), _result(1)]
    )

    results = submission_service.list_test_case_results(db, submission.id)
    assert [r.test_case for r in results] == [1, 2]
    assert [r.passed for r in results] == [True, False]
    assert submission.source_code["PYTHON"].startswith("a, b")
    assert [r.test_case for r in submission.test_case_results] == [1, 2]


def test_submission_for_unknown_problem_is_rejected(db, author_and_problem):
    user, _ = author_and_problem

    with pytest.raises(ForeignKeyViolation):
        submission_service.create_submission(
            db,
            _submission(user.id, "no-such-problem"),
            test_case_results=[_result(1)]
        )

    assert db.query(Submission).count() == 0
    assert db.query(TestCaseResult).count() == 0


def test_submission_for_unknown_user_is_rejected(db, author_and_problem):
    _, problem = author_and_problem

    with pytest.raises(ForeignKeyViolation):
        submission_service.create_submission(
            db,
            _submission("no-such-user", problem.id)
        )


def test_add_test_case_result(db, author_and_problem):
    user, problem = author_and_problem
    submission = submission_service.create_submission(
        db,
        _submission(user.id, problem.id, status="Running")
    )

    result = submission_service.add_test_case_result(
        db,
        submission.id,
        _result(1, stderr="warning: unused variable")
    )

    assert result.submission_id == submission.id
    assert result.stderr == "warning: unused variable"
    assert len(submission_service.list_test_case_results(
        db, submission.id
    )) == 1


def test_result_for_unknown_submission_is_rejected(db):
    with pytest.raises(ForeignKeyViolation):
        submission_service.add_test_case_result(db, "missing", _result(1))


def test_negative_test_case_index_fails_validation():
    with pytest.raises(ValidationError):
        _result(-1)


def test_update_submission_records_output(db, author_and_problem):
    user, problem = author_and_problem
    submission = submission_service.create_submission(
        db,
        _submission(user.id, problem.id, status="Running")
    )

    updated = submission_service.update_submission(
        db,
        submission.id,
        SubmissionUpdate(
            status="Wrong Answer",
            stdout="4",
            memory="9.1 MB",
            time="0.02 s"
        )
    )

    assert updated.status == "Wrong Answer"
    assert updated.stdout == "4"
    assert updated.compile_output is None


def test_list_and_count_submissions(db, make_user, make_problem):
    alice = make_user()
    bob = make_user()
    first = make_problem(alice)
    second = make_problem(alice, title="Second")
    submission_service.create_submission(db, _submission(alice.id, first.id))
    submission_service.create_submission(db, _submission(bob.id, first.id))
    submission_service.create_submission(db, _submission(bob.id, second.id))

    assert submission_service.count_submissions_for_problem(db, first.id) == 2
    assert submission_service.count_submissions_for_problem(db, "none") == 0
    assert len(submission_service.list_submissions(db)) == 3
    assert len(submission_service.list_submissions(db, user_id=bob.id)) == 2
    assert len(submission_service.list_submissions(
        db, user_id=bob.id, problem_id=second.id
    )) == 1


def test_delete_submission_removes_results(db, author_and_problem):
    user, problem = author_and_problem
    submission = submission_service.create_submission(
        db,
        _submission(user.id, problem.id),
        test_case_results=[_result(1), _result(2)]
    )

    submission_service.delete_submission(db, submission.id)

    assert db.query(Submission).count() == 0
    assert db.query(TestCaseResult).count() == 0


def test_missing_submission_raises_not_found(db):
    with pytest.raises(SubmissionNotFoundError):
        submission_service.update_submission(
            db,
            "missing",
            SubmissionUpdate(status="Accepted")
        )


def test_list_submissions_newest_first(db, author_and_problem):
    user, problem = author_and_problem
    created = [
        submission_service.create_submission(
            db,
            _submission(user.id, problem.id, stdout=str(i))
        ).id
        for i in range(6)
    ]

    listed = submission_service.list_submissions(db, user_id=user.id)

    assert [s.id for s in listed] == list(reversed(created))

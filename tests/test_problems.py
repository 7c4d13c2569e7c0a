"""
Problem and solved-problem data access tests.
"""

import pytest
from pydantic import ValidationError
from sqlalchemy.dialects import postgresql

from leetlab.common.db import create_session_factory
from leetlab.common.errors import (
    ForeignKeyViolation,
    ProblemNotFoundError,
    UniqueConstraintViolation,
)
from leetlab.common.models import Difficulty, Problem, ProblemSolved
from leetlab.common.schemas import ProblemCreate, ProblemUpdate
from leetlab.modules import problem_service


def test_create_problem_stores_json_documents(db, make_user, make_problem):
    author = make_user()
    problem = make_problem(author)

    stored = problem_service.get_problem(db, problem.id)

    assert stored.user_id == author.id
    assert stored.difficulty == Difficulty.EASY
    assert stored.testcases[1] == {"input": "5 7", "output": "12"}
    assert "PYTHON" in stored.reference_solutions


def test_tags_behave_as_a_set(db, make_user, make_problem):
    problem = make_problem(make_user(), tags=["dp", "array", "dp", " array "])

    assert problem.tags == ["dp", "array"]


def test_unknown_difficulty_fails_validation():
    with pytest.raises(ValidationError):
        ProblemCreate(
            title="t",
            description="d",
            difficulty="IMPOSSIBLE",
            user_id="u",
            examples={},
            constraints="",
            testcases=[],
            code_snippets={},
            reference_solutions={},
        )


def test_problem_with_unknown_author_is_rejected(db, make_user, make_problem):
    with pytest.raises(ForeignKeyViolation):
        make_problem(make_user(), user_id="no-such-user")

    assert db.query(Problem).count() == 0


def test_list_problems_filters(db, make_user, make_problem):
    author = make_user()
    easy = make_problem(author, tags=["math"])
    hard = make_problem(author, difficulty=Difficulty.HARD, tags=["graph"])

    assert {p.id for p in problem_service.list_problems(db)} == {
        easy.id, hard.id
    }
    assert [p.id for p in problem_service.list_problems(
        db, difficulty=Difficulty.HARD
    )] == [hard.id]
    assert [p.id for p in problem_service.list_problems(
        db, tag="math"
    )] == [easy.id]
    assert {p.id for p in problem_service.list_problems_by_author(
        db, author.id
    )} == {easy.id, hard.id}
    assert problem_service.list_problems_by_author(db, "nobody") == []



def test_tag_filter_uses_jsonb_containment_on_postgresql():
    sql = str(problem_service.tag_filter("graph").compile(
        dialect=postgresql.dialect()
    ))

    assert "CAST(problems.tags AS JSONB)" in sql
    assert "@>" in sql

def test_update_problem(db, make_user, make_problem):
    problem = make_problem(make_user(), hints="Think about carries")

    updated = problem_service.update_problem(
        db,
        problem.id,
        ProblemUpdate(
            difficulty=Difficulty.MEDIUM,
            hints=None,
            tags=["math", "math"],
            title=None
        )
    )

    assert updated.difficulty == Difficulty.MEDIUM
    assert updated.hints is None
    assert updated.tags == ["math"]
    assert updated.title == "Add Two Numbers"


def test_missing_problem_raises_not_found(db):
    with pytest.raises(ProblemNotFoundError):
        problem_service.delete_problem(db, "missing")


class TestProblemSolved:
    """Solved-problem records."""

    def test_one_record_per_user_and_problem(self, db, make_user, make_problem):
        user = make_user()
        problem = make_problem(user)
        problem_service.create_problem_solved(db, user.id, problem.id)

        with pytest.raises(UniqueConstraintViolation) as exc_info:
            problem_service.create_problem_solved(db, user.id, problem.id)

        assert exc_info.value.fields == ("user_id", "problem_id")
        assert db.query(ProblemSolved).count() == 1

    def test_mark_problem_solved_is_idempotent(
        self, db, make_user, make_problem
    ):
        user = make_user()
        problem = make_problem(user)

        first = problem_service.mark_problem_solved(db, user.id, problem.id)
        second = problem_service.mark_problem_solved(db, user.id, problem.id)

        assert first.id == second.id
        assert db.query(ProblemSolved).count() == 1

    def test_different_users_may_solve_the_same_problem(
        self, db, make_user, make_problem
    ):
        author = make_user()
        other = make_user()
        problem = make_problem(author)

        problem_service.create_problem_solved(db, author.id, problem.id)
        problem_service.create_problem_solved(db, other.id, problem.id)

        assert db.query(ProblemSolved).count() == 2

    def test_solved_record_requires_existing_problem(self, db, make_user):
        user = make_user()

        with pytest.raises(ForeignKeyViolation):
            problem_service.create_problem_solved(db, user.id, "missing")

    def test_list_solved_problems(self, db, make_user, make_problem):
        user = make_user()
        solved = make_problem(user, title="Solved")
        make_problem(user, title="Unsolved")
        problem_service.mark_problem_solved(db, user.id, solved.id)

        result = problem_service.list_solved_problems(db, user.id)

        assert [p.id for p in result] == [solved.id]

    def test_mark_problem_solved_tolerates_concurrent_insert(
        self, engine, db, make_user, make_problem, monkeypatch
    ):
        user = make_user()
        problem = make_problem(user)
        other = create_session_factory(engine)()
        lookup = problem_service.get_problem_solved
        winners = []

        def lookup_then_lose_race(session, user_id, problem_id):
            found = lookup(session, user_id, problem_id)
            if not winners:
                # the first session commits right after this check
                winners.append(
                    problem_service.create_problem_solved(db, user_id, problem_id)
                )
            return found

        monkeypatch.setattr(
            problem_service, "get_problem_solved", lookup_then_lose_race
        )
        try:
            record = problem_service.mark_problem_solved(
                other, user.id, problem.id
            )
        finally:
            other.close()

        assert record.id == winners[0].id
        assert db.query(ProblemSolved).count() == 1

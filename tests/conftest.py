"""
Pytest configuration and fixtures.
"""

import pytest

from leetlab.common.db import (
    create_engine_from_url,
    create_schema,
    create_session_factory,
)
from leetlab.common.models import Difficulty
from leetlab.common.schemas import ProblemCreate, UserCreate
from leetlab.modules import problem_service, user_service


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'leetlab.db'}"


@pytest.fixture
def engine(database_url):
    engine = create_engine_from_url(database_url)
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Create users with unique emails unless one is given."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "email": f"user{counter['n']}@example.com",
            "password": "$2b$10$hashedpassword",
            "name": f"User {counter['n']}",
        }
        fields.update(overrides)
        return user_service.create_user(db, UserCreate(**fields))

    return _make


@pytest.fixture
def make_problem(db):
    """Create problems authored by the given user."""

    def _make(author, **overrides):
        fields = {
            "title": "Add Two Numbers",
            "description": "Read two integers and print their sum.",
            "difficulty": Difficulty.EASY,
            "tags": ["math", "basics"],
            "user_id": author.id,
            "examples": {"PYTHON": {"input": "1 2", "output": "3"}},
            "constraints": "-10^9 <= a, b <= 10^9",
            "testcases": [
                {"input": "1 2", "output": "3"},
                {"input": "5 7", "output": "12"},
            ],
            "code_snippets": {"PYTHON": "def solve(a, b):\n    pass\n"},
            "reference_solutions": {
                "PYTHON": "def solve(a, b):\n    return a + b\n"
            },
        }
        fields.update(overrides)
        return problem_service.create_problem(db, ProblemCreate(**fields))

    return _make

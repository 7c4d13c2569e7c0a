"""
Pydantic schemas validating data written through the data-access layer.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.enums import Difficulty, UserRole


# User schemas
class UserCreate(BaseModel):
    """Fields accepted when creating a user."""

    email: str = Field(
        ...,
        min_length=3,
        max_length=255,
        pattern=r"^[^@\s]+@[^@\s]+$",
        description="Unique login email"
    )
    password: str = Field(
        ...,
        min_length=1,
        description="Already-hashed password"
    )
    name: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = Field(default=None, description="Avatar URL")
    role: UserRole = Field(default=UserRole.USER)


class UserUpdate(BaseModel):
    """Fields that may change on an existing user."""

    email: Optional[str] = Field(
        default=None,
        min_length=3,
        max_length=255,
        pattern=r"^[^@\s]+@[^@\s]+$"
    )
    password: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = None
    role: Optional[UserRole] = None


# Problem schemas
def _unique_tags(tags: Optional[list[str]]) -> Optional[list[str]]:
    if tags is None:
        return None
    seen: dict[str, None] = {}
    for tag in tags:
        tag = tag.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


class ProblemCreate(BaseModel):
    """Fields accepted when creating a problem."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    difficulty: Difficulty
    tags: list[str] = Field(
        default_factory=list,
        description="Topic tags, treated as a set"
    )
    user_id: str = Field(..., description="Author user ID")
    examples: Any = Field(..., description="Per-language examples")
    constraints: str
    hints: Optional[str] = None
    editorial: Optional[str] = None
    testcases: Any = Field(..., description="Judge input/output pairs")
    code_snippets: Any = Field(..., description="Starter code per language")
    reference_solutions: Any = Field(
        ...,
        description="Reference solution per language"
    )

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: Optional[list[str]]) -> Optional[list[str]]:
        return _unique_tags(tags)


class ProblemUpdate(BaseModel):
    """Fields that may change on an existing problem."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    difficulty: Optional[Difficulty] = None
    tags: Optional[list[str]] = None
    examples: Any = None
    constraints: Optional[str] = None
    hints: Optional[str] = None
    editorial: Optional[str] = None
    testcases: Any = None
    code_snippets: Any = None
    reference_solutions: Any = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: Optional[list[str]]) -> Optional[list[str]]:
        return _unique_tags(tags)


# Submission schemas
class TestCaseResultCreate(BaseModel):
    """Outcome of a single test case as reported by the judge."""

    __test__ = False  # not a pytest class

    test_case: int = Field(..., ge=0, description="Test case index")
    passed: bool
    stdout: Optional[str] = None
    expected: str
    stderr: Optional[str] = None
    compile_output: Optional[str] = None
    status: str = Field(..., min_length=1)
    memory: Optional[str] = None
    time: Optional[str] = None


class SubmissionCreate(BaseModel):
    """Fields accepted when recording a submission."""

    user_id: str
    problem_id: str
    source_code: dict[str, Any] = Field(
        ...,
        description="Submitted source keyed by language"
    )
    language: str = Field(..., min_length=1, max_length=50)
    stdin: Optional[str] = None
    stdout: Optional[str] = None
    stderr: Optional[str] = None
    compile_output: Optional[str] = None
    status: str = Field(..., min_length=1, max_length=50)
    memory: Optional[str] = None
    time: Optional[str] = None


class SubmissionUpdate(BaseModel):
    """Execution output recorded after judging."""

    stdout: Optional[str] = None
    stderr: Optional[str] = None
    compile_output: Optional[str] = None
    status: Optional[str] = Field(default=None, min_length=1, max_length=50)
    memory: Optional[str] = None
    time: Optional[str] = None


# Playlist schemas
class PlaylistCreate(BaseModel):
    """Fields accepted when creating a playlist."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    user_id: str


class PlaylistUpdate(BaseModel):
    """Fields that may change on an existing playlist."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None

"""
Database models package.

Exports all SQLAlchemy models for use across the application.
"""

from .base import Base, generate_id
from .enums import Difficulty, UserRole
from .playlist import Playlist, ProblemInPlaylist
from .problem import Problem
from .problem_solved import ProblemSolved
from .submission import Submission
from .test_case_result import TestCaseResult
from .user import User

__all__ = [
    "Base",
    "Difficulty",
    "Playlist",
    "Problem",
    "ProblemInPlaylist",
    "ProblemSolved",
    "Submission",
    "TestCaseResult",
    "User",
    "UserRole",
    "generate_id",
]

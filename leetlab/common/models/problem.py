"""
Problem model for practice problems.
"""

from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import JSON, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, EntityMixin
from .enums import Difficulty

if TYPE_CHECKING:
    from .playlist import ProblemInPlaylist
    from .problem_solved import ProblemSolved
    from .submission import Submission
    from .user import User


class Problem(EntityMixin, Base):
    """
    Practice problem entity.

    Examples, test cases, code snippets and reference solutions are
    schema-less JSON documents keyed by whatever the judge expects
    (usually language name).
    """

    __tablename__ = "problems"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    difficulty: Mapped[Difficulty] = mapped_column(
        Enum(Difficulty, name="difficulty"),
        nullable=False
    )
    tags: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    examples: Mapped[Any] = mapped_column(JSON, nullable=False)
    constraints: Mapped[str] = mapped_column(Text, nullable=False)
    hints: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    editorial: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    testcases: Mapped[Any] = mapped_column(JSON, nullable=False)
    code_snippets: Mapped[Any] = mapped_column(JSON, nullable=False)
    reference_solutions: Mapped[Any] = mapped_column(JSON, nullable=False)

    # Relationships
    author: Mapped["User"] = relationship(
        "User",
        back_populates="problems"
    )
    submissions: Mapped[list["Submission"]] = relationship(
        "Submission",
        back_populates="problem",
        cascade="all, delete",
        passive_deletes=True
    )
    solved_by: Mapped[list["ProblemSolved"]] = relationship(
        "ProblemSolved",
        back_populates="problem",
        cascade="all, delete",
        passive_deletes=True
    )
    playlist_entries: Mapped[list["ProblemInPlaylist"]] = relationship(
        "ProblemInPlaylist",
        back_populates="problem",
        cascade="all, delete",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Problem(id={self.id}, title={self.title})>"

"""
Join model recording that a user solved a problem.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, EntityMixin

if TYPE_CHECKING:
    from .problem import Problem
    from .user import User


class ProblemSolved(EntityMixin, Base):
    """At most one record per (user, problem)."""

    __tablename__ = "problem_solved"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "problem_id",
            name="uq_problem_solved_user_problem"
        ),
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    problem_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("problems.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="solved_problems"
    )
    problem: Mapped["Problem"] = relationship(
        "Problem",
        back_populates="solved_by"
    )

    def __repr__(self) -> str:
        return (
            f"<ProblemSolved(user_id={self.user_id}, "
            f"problem_id={self.problem_id})>"
        )

"""
Submission model for storing user code submissions.
"""

from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, EntityMixin

if TYPE_CHECKING:
    from .problem import Problem
    from .test_case_result import TestCaseResult
    from .user import User


class Submission(EntityMixin, Base):
    """
    Submission entity.

    Stores the submitted source together with the aggregate execution
    output reported by the judge. Memory and time are kept as the opaque
    strings the judge returns.
    """

    __tablename__ = "submissions"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    problem_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("problems.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    source_code: Mapped[Any] = mapped_column(JSON, nullable=False)
    language: Mapped[str] = mapped_column(String(50), nullable=False)
    stdin: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    stdout: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    stderr: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    compile_output: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True
    )
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    memory: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    time: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="submissions"
    )
    problem: Mapped["Problem"] = relationship(
        "Problem",
        back_populates="submissions"
    )
    test_case_results: Mapped[list["TestCaseResult"]] = relationship(
        "TestCaseResult",
        back_populates="submission",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TestCaseResult.test_case"
    )

    def __repr__(self) -> str:
        return (
            f"<Submission(id={self.id}, "
            f"status={self.status})>"
        )

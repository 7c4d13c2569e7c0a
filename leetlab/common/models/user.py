"""
User model for platform accounts.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Enum, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, EntityMixin
from .enums import UserRole

if TYPE_CHECKING:
    from .playlist import Playlist
    from .problem import Problem
    from .problem_solved import ProblemSolved
    from .submission import Submission


class User(EntityMixin, Base):
    """
    Platform account.

    The password column holds an already-hashed value; hashing and
    verification belong to the authentication layer.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.USER
    )
    password: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    problems: Mapped[list["Problem"]] = relationship(
        "Problem",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    submissions: Mapped[list["Submission"]] = relationship(
        "Submission",
        back_populates="user",
        cascade="all, delete",
        passive_deletes=True
    )
    solved_problems: Mapped[list["ProblemSolved"]] = relationship(
        "ProblemSolved",
        back_populates="user",
        cascade="all, delete",
        passive_deletes=True
    )
    playlists: Mapped[list["Playlist"]] = relationship(
        "Playlist",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

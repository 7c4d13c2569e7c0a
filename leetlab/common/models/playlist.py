"""
Playlist models: user-owned problem collections.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, EntityMixin

if TYPE_CHECKING:
    from .problem import Problem
    from .user import User


class Playlist(EntityMixin, Base):
    """
    Named collection of problems owned by a user.

    Playlist names are unique per owner.
    """

    __tablename__ = "playlists"
    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_playlists_name_user"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="playlists"
    )
    entries: Mapped[list["ProblemInPlaylist"]] = relationship(
        "ProblemInPlaylist",
        back_populates="playlist",
        cascade="all, delete",
        passive_deletes=True,
        order_by="ProblemInPlaylist.created_at"
    )

    @property
    def problems(self) -> list["Problem"]:
        return [entry.problem for entry in self.entries]

    def __repr__(self) -> str:
        return f"<Playlist(id={self.id}, name={self.name})>"


class ProblemInPlaylist(EntityMixin, Base):
    """Link between a playlist and a problem, at most once per pair."""

    __tablename__ = "problems_in_playlist"
    __table_args__ = (
        UniqueConstraint(
            "playlist_id",
            "problem_id",
            name="uq_problems_in_playlist_playlist_problem"
        ),
    )

    playlist_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("playlists.id", ondelete="CASCADE"),
        nullable=False
    )
    problem_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("problems.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Relationships
    playlist: Mapped["Playlist"] = relationship(
        "Playlist",
        back_populates="entries"
    )
    problem: Mapped["Problem"] = relationship(
        "Problem",
        back_populates="playlist_entries"
    )

    def __repr__(self) -> str:
        return (
            f"<ProblemInPlaylist(playlist_id={self.playlist_id}, "
            f"problem_id={self.problem_id})>"
        )

"""
Playlist data access.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session, selectinload

from ..common.errors import PlaylistNotFoundError, integrity_guard
from ..common.models import Playlist, ProblemInPlaylist
from ..common.schemas import PlaylistCreate, PlaylistUpdate

logger = logging.getLogger(__name__)


def create_playlist(db: Session, data: PlaylistCreate) -> Playlist:
    """
    Create a playlist.

    Raises:
        UniqueConstraintViolation: If the owner already has a playlist
            with this name
        ForeignKeyViolation: If the owner doesn't exist
    """
    playlist = Playlist(**data.model_dump())

    with integrity_guard(db, Playlist.__tablename__):
        db.add(playlist)
        db.commit()
    db.refresh(playlist)

    logger.info(f"Created playlist {playlist.id} for {playlist.user_id}")
    return playlist


def get_playlist(db: Session, playlist_id: str) -> Optional[Playlist]:
    """Retrieve playlist by ID with its problems loaded, or None."""
    return db.query(Playlist).options(
        selectinload(Playlist.entries).selectinload(ProblemInPlaylist.problem)
    ).filter(Playlist.id == playlist_id).first()


def require_playlist(db: Session, playlist_id: str) -> Playlist:
    """
    Retrieve playlist by ID.

    Raises:
        PlaylistNotFoundError: If playlist doesn't exist
    """
    playlist = get_playlist(db, playlist_id)
    if not playlist:
        raise PlaylistNotFoundError(playlist_id)
    return playlist


def list_playlists(db: Session, user_id: str) -> list[Playlist]:
    """List a user's playlists with their problems loaded."""
    return db.query(Playlist).options(
        selectinload(Playlist.entries).selectinload(ProblemInPlaylist.problem)
    ).filter(
        Playlist.user_id == user_id
    ).order_by(Playlist.created_at, Playlist.id).all()


def update_playlist(
    db: Session,
    playlist_id: str,
    data: PlaylistUpdate
) -> Playlist:
    """
    Rename or re-describe a playlist.

    Raises:
        PlaylistNotFoundError: If playlist doesn't exist
        UniqueConstraintViolation: If the new name is already used by
            the owner
    """
    playlist = require_playlist(db, playlist_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field == "name":
            continue
        setattr(playlist, field, value)

    with integrity_guard(db, Playlist.__tablename__):
        db.commit()
    db.refresh(playlist)

    logger.info(f"Updated playlist {playlist_id}")
    return playlist


def delete_playlist(db: Session, playlist_id: str) -> None:
    """
    Delete a playlist and its problem links. Problems are untouched.

    Raises:
        PlaylistNotFoundError: If playlist doesn't exist
    """
    playlist = require_playlist(db, playlist_id)

    with integrity_guard(db, Playlist.__tablename__):
        db.delete(playlist)
        db.commit()

    logger.info(f"Deleted playlist {playlist_id}")


def add_problems_to_playlist(
    db: Session,
    playlist_id: str,
    problem_ids: Iterable[str]
) -> list[ProblemInPlaylist]:
    """
    Link problems to a playlist in a single transaction.

    Either every link is created or none is.

    Args:
        db: Database session
        playlist_id: Target playlist
        problem_ids: Problems to add

    Returns:
        Created link instances

    Raises:
        UniqueConstraintViolation: If a problem is already in the playlist
        ForeignKeyViolation: If the playlist or a problem doesn't exist
    """
    entries = [
        ProblemInPlaylist(playlist_id=playlist_id, problem_id=problem_id)
        for problem_id in problem_ids
    ]

    with integrity_guard(db, ProblemInPlaylist.__tablename__):
        db.add_all(entries)
        db.commit()
    for entry in entries:
        db.refresh(entry)

    logger.info(f"Added {len(entries)} problems to playlist {playlist_id}")
    return entries


def remove_problems_from_playlist(
    db: Session,
    playlist_id: str,
    problem_ids: Iterable[str]
) -> int:
    """
    Unlink problems from a playlist.

    Returns:
        Number of links removed
    """
    problem_ids = list(problem_ids)
    removed = db.query(ProblemInPlaylist).filter(
        ProblemInPlaylist.playlist_id == playlist_id,
        ProblemInPlaylist.problem_id.in_(problem_ids)
    ).delete(synchronize_session=False)
    db.commit()

    logger.info(f"Removed {removed} problems from playlist {playlist_id}")
    return removed

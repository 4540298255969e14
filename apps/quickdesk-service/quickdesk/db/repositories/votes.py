"""
Vote repository functions.
"""
from __future__ import annotations

import uuid
from typing import Dict, Iterable, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from quickdesk.db import models
from quickdesk.utils.statuses import VOTE_DOWN, VOTE_UP


def get_vote(db: Session, *, user_id: uuid.UUID, ticket_id: uuid.UUID) -> Optional[models.Vote]:
    return (
        db.query(models.Vote)
        .filter(models.Vote.user_id == user_id, models.Vote.ticket_id == ticket_id)
        .first()
    )


def user_votes(db: Session, *, user_id: uuid.UUID, ticket_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, str]:
    """Return {ticket_id: vote type} for the user's votes on the given tickets."""
    ids = list(ticket_ids)
    if not ids:
        return {}
    rows = (
        db.query(models.Vote.ticket_id, models.Vote.type)
        .filter(models.Vote.user_id == user_id, models.Vote.ticket_id.in_(ids))
        .all()
    )
    return {ticket_id: vote_type for ticket_id, vote_type in rows}


def add_vote(db: Session, *, user_id: uuid.UUID, ticket_id: uuid.UUID, vote_type: str) -> models.Vote:
    vote = models.Vote(user_id=user_id, ticket_id=ticket_id, type=vote_type)
    db.add(vote)
    db.flush()
    return vote


def remove_vote(db: Session, vote: models.Vote) -> None:
    db.delete(vote)
    db.flush()


def change_vote(db: Session, vote: models.Vote, vote_type: str) -> models.Vote:
    vote.type = vote_type
    db.flush()
    return vote


def tally(db: Session, ticket_id: uuid.UUID) -> Tuple[int, int]:
    """Return (up, down) vote counts for a ticket."""
    rows = (
        db.query(models.Vote.type, func.count(models.Vote.id))
        .filter(models.Vote.ticket_id == ticket_id)
        .group_by(models.Vote.type)
        .all()
    )
    counts = {vote_type: int(n) for vote_type, n in rows}
    return counts.get(VOTE_UP, 0), counts.get(VOTE_DOWN, 0)

"""Append-only comments on resources."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from stratizen_hub.models import Comment, User
from stratizen_hub.services import resource_service
from stratizen_hub.services.points import award_points, current_policy

logger = logging.getLogger(__name__)


def add_comment(db: Session, author: User, resource_id: int, content: str) -> Comment:
    """Append a comment to a resource.

    The comment point delta only applies when ``AWARD_COMMENT_POINTS`` is on.
    """
    resource_service.get_visible_resource(db, author, resource_id)
    comment = Comment(content=content, user_id=author.id, resource_id=resource_id)
    db.add(comment)
    db.flush()

    policy = current_policy()
    if policy.award_comment_points:
        award_points(db, author.id, policy.comment, "comment")
    db.commit()
    db.refresh(comment)
    return comment


def list_comments(db: Session, resource_id: int) -> Sequence[Comment]:
    """Return a resource's comments, newest first."""
    return (
        db.query(Comment)
        .filter(Comment.resource_id == resource_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )

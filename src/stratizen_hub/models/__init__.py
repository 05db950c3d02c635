# src/stratizen_hub/models/__init__.py
"""SQLAlchemy models for the Stratizen Hub application."""

from .catalog import ClassInstance, Course, Group, Program, Semester, Unit, Year
from .engagement import Comment, Completion, ResourceVote
from .rank import Rank
from .resource import Resource, ResourceType
from .user import AuthSession, User

__all__ = [
    "AuthSession", "User",
    "ClassInstance", "Course", "Group", "Program", "Semester", "Unit", "Year",
    "Comment", "Completion", "ResourceVote",
    "Rank",
    "Resource", "ResourceType",
]

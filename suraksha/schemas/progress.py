"""
Progress tracking schemas for Suraksha.

Defines Pydantic models for student progress including:
- Completion records (one per user and item, overwritten on re-completion)
- Computed section state (locked / unlocked / completed per item)
- Dashboard summaries and achievements
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .catalog import ContentItem


class ItemStatus(str, Enum):
    LOCKED = "locked"           # previous item not completed
    UNLOCKED = "unlocked"       # can be started
    COMPLETED = "completed"     # finished


class CompletionRecord(BaseModel):
    user_id: str
    item_id: str
    completed: bool = True
    completed_at: Optional[datetime] = None
    score: Optional[float] = Field(default=None, ge=0, le=100)


class ItemState(BaseModel):
    item: ContentItem
    status: ItemStatus


class SectionState(BaseModel):
    section_key: str
    items: list[ItemState]
    completed_count: int
    total_count: int
    completion_percent: int = Field(..., ge=0, le=100)

    def status_of(self, item_id: str) -> Optional[ItemStatus]:
        for state in self.items:
            if state.item.id == item_id:
                return state.status
        return None


class Achievement(BaseModel):
    id: str
    name: str
    description: str


class StudentSummary(BaseModel):
    user_id: str
    items_completed: int = 0
    quizzes_passed: int = 0
    average_score: int = 0
    total_badges: int = 0
    last_activity: Optional[datetime] = None


class ClassSummary(BaseModel):
    total_students: int = 0
    active_students: int = 0        # activity within the last week
    average_score: int = 0
    top_performer: Optional[str] = None

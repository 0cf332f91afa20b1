"""
Content catalog schemas for Suraksha.

Defines Pydantic models for authored learning content:
- Content items (drill videos, first aid modules, reading modules)
- Sections with a single linear unlock chain
- The catalog of all sections and quiz banks
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .quiz import QuestionBank


# =============================================================================
# ORDER CONVENTION: item orders within a section are 1-based and dense (1..N).
# Item k is unlocked by completing item k-1; item 1 is always open.
# =============================================================================


def validate_orders(orders: list[int]) -> list[int]:
    """Shared order validation: exactly 1..N, no gaps or duplicates."""
    if sorted(orders) != list(range(1, len(orders) + 1)):
        raise ValueError(f"Item orders must be contiguous from 1, got {sorted(orders)}")
    return orders


class Track(str, Enum):
    """Top-level learning area a section belongs to."""
    DRILLS = "drills"
    FIRST_AID = "first_aid"
    MODULES = "modules"


class ContentKind(str, Enum):
    VIDEO = "video"
    ARTICLE = "article"
    PDF = "pdf"


class ContentItem(BaseModel):
    """A single lesson/video/reading. Display fields are opaque to the engine."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    order: int = Field(..., ge=1)
    title: str
    description: str = ""
    media_url: Optional[str] = None
    kind: ContentKind = ContentKind.VIDEO
    duration: Optional[str] = None   # display string, e.g. "5:32" or "15 min read"
    lessons: Optional[int] = None    # number of sub-lessons in a playlist


class Section(BaseModel):
    """Named, ordered group of items sharing one unlock chain."""
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1)
    track: Track
    title: str
    description: str = ""
    icon: Optional[str] = None
    items: list[ContentItem] = []

    @field_validator("items")
    @classmethod
    def items_ordered(cls, v: list[ContentItem]) -> list[ContentItem]:
        validate_orders([item.order for item in v])
        ids = [item.id for item in v]
        if len(set(ids)) != len(ids):
            raise ValueError("Item ids must be unique within a section")
        return sorted(v, key=lambda item: item.order)

    @property
    def item_ids(self) -> list[str]:
        return [item.id for item in self.items]

    def get_item(self, item_id: str) -> Optional[ContentItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def item_at(self, order: int) -> Optional[ContentItem]:
        """Item with the given 1-based order, or None if out of range."""
        if 1 <= order <= len(self.items):
            return self.items[order - 1]
        return None


class Catalog(BaseModel):
    """All authored content, loaded once at startup and read-only afterwards."""
    model_config = ConfigDict(frozen=True)

    sections: dict[str, Section] = {}      # keyed by section key
    banks: dict[str, QuestionBank] = {}    # keyed by quiz id

    @model_validator(mode="after")
    def ids_unique(self):
        seen: set[str] = set()
        for section in self.sections.values():
            for item_id in section.item_ids:
                if item_id in seen:
                    raise ValueError(f"Duplicate item id across sections: {item_id}")
                seen.add(item_id)
        for key, section in self.sections.items():
            if key != section.key:
                raise ValueError(f"Section stored under '{key}' has key '{section.key}'")
        for quiz_id, bank in self.banks.items():
            if quiz_id != bank.id:
                raise ValueError(f"Bank stored under '{quiz_id}' has id '{bank.id}'")
        return self

    def get_section(self, key: str) -> Optional[Section]:
        return self.sections.get(key)

    def get_sections(self, track: Track) -> list[Section]:
        """Sections of one track, in catalog order."""
        return [s for s in self.sections.values() if s.track == track]

    def get_bank(self, quiz_id: str) -> Optional[QuestionBank]:
        return self.banks.get(quiz_id)

    @property
    def all_item_ids(self) -> set[str]:
        return {item_id for s in self.sections.values() for item_id in s.item_ids}

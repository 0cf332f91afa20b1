"""
Unlock engine - Linear content gating, completion and navigation.

Provides:
- Per-item state (locked / unlocked / completed) for a section
- Section and track completion percentages
- Idempotent completion with optimistic in-memory update
- Next/recommended item navigation
"""

import logging
from typing import Iterable, Optional

from suraksha.errors import PersistError
from suraksha.schemas import (
    Catalog,
    ContentItem,
    ItemState,
    ItemStatus,
    Section,
    SectionState,
    Track,
)
from suraksha.utils import percent_of

from .progress import ProgressSink

logger = logging.getLogger(__name__)


def item_status(section: Section, item: ContentItem, completions: set[str] | frozenset[str]) -> ItemStatus:
    """
    Status of one item under the linear unlock chain.

    Completion wins over lock state: the completion set is trusted as-is,
    history is not re-verified.
    """
    if item.id in completions:
        return ItemStatus.COMPLETED
    if item.order == 1:
        return ItemStatus.UNLOCKED
    previous = section.item_at(item.order - 1)
    if previous is not None and previous.id in completions:
        return ItemStatus.UNLOCKED
    return ItemStatus.LOCKED


def compute_section_state(section: Section, completions: Iterable[str]) -> SectionState:
    """Compute every item's status and the section completion percentage."""
    done = frozenset(completions)
    states = [
        ItemState(item=item, status=item_status(section, item, done))
        for item in section.items
    ]
    completed_count = sum(1 for s in states if s.status == ItemStatus.COMPLETED)
    return SectionState(
        section_key=section.key,
        items=states,
        completed_count=completed_count,
        total_count=len(states),
        completion_percent=percent_of(completed_count, len(states)),
    )


class UnlockEngine:
    """
    Gate content for one user.

    Combines the Catalog (content) with a ProgressSink (user state). The
    completion set is loaded once and then kept in memory; completions are
    applied optimistically before the store write.
    """

    def __init__(self, catalog: Catalog, store: ProgressSink, user_id: str):
        """
        Initialize engine.

        Args:
            catalog: Loaded content catalog
            store: Progress store (get_completions / upsert_completion)
            user_id: User whose progress is gated
        """
        self.catalog = catalog
        self.store = store
        self.user_id = user_id
        self._completions: set[str] = set()
        self.refresh()

    def refresh(self):
        """Reload the completion set from the store."""
        self._completions = set(self.store.get_completions(self.user_id))

    @property
    def completions(self) -> frozenset[str]:
        return frozenset(self._completions)

    # -------------------------------------------------------------------------
    # State queries
    # -------------------------------------------------------------------------

    def _section(self, section_key: str) -> Section:
        section = self.catalog.get_section(section_key)
        if section is None:
            raise KeyError(f"Unknown section: {section_key}")
        return section

    def get_section_state(self, section_key: str) -> SectionState:
        return compute_section_state(self._section(section_key), self._completions)

    def get_item_status(self, section_key: str, item_id: str) -> ItemStatus:
        section = self._section(section_key)
        item = section.get_item(item_id)
        if item is None:
            raise KeyError(f"Item {item_id} not in section {section_key}")
        return item_status(section, item, self._completions)

    def is_item_accessible(self, section_key: str, item_id: str) -> bool:
        """Check if an item can be opened (unlocked or already completed)."""
        return self.get_item_status(section_key, item_id) != ItemStatus.LOCKED

    def get_track_progress(self, track: Track) -> int:
        """Completion percent across every item of a track."""
        items = [item_id for s in self.catalog.get_sections(track) for item_id in s.item_ids]
        done = sum(1 for item_id in items if item_id in self._completions)
        return percent_of(done, len(items))

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------

    def mark_complete(self, item_id: str, score: Optional[float] = None):
        """
        Mark an item completed for this user.

        Idempotent. Does not check that the item is currently unlocked.
        The in-memory set is updated first; if the store write raises
        PersistError it propagates and the caller decides whether to
        call discard_completion().
        """
        self._completions.add(item_id)
        try:
            self.store.upsert_completion(self.user_id, item_id, score)
        except PersistError:
            logger.warning(f"Completion of {item_id} for {self.user_id} not persisted")
            raise
        logger.debug(f"Marked {item_id} complete for {self.user_id}")

    def discard_completion(self, item_id: str):
        """Roll back an optimistic in-memory completion."""
        self._completions.discard(item_id)

    def mark_incomplete(self, item_id: str):
        """
        Remove a completion so the item can be worked through again.

        Items later in the chain keep their own completions. The store is
        written first; on PersistError the in-memory set is left unchanged.
        """
        self.store.reset_item(self.user_id, item_id)
        self._completions.discard(item_id)
        logger.debug(f"Marked {item_id} incomplete for {self.user_id}")

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_next_item_id(self, section_key: str, item_id: str) -> Optional[str]:
        """Get the ID of the item after this one in the chain."""
        section = self._section(section_key)
        item = section.get_item(item_id)
        if item is None:
            return None
        following = section.item_at(item.order + 1)
        return following.id if following else None

    def get_recommended_item_id(self, section_key: str) -> Optional[str]:
        """
        First unlocked (not yet completed) item of the section.

        Returns None when every item is completed.
        """
        state = self.get_section_state(section_key)
        for item_state in state.items:
            if item_state.status == ItemStatus.UNLOCKED:
                return item_state.item.id
        return None

    def get_progress_summary(self) -> dict:
        """Get per-track and per-section progress for display."""
        tracks = {}
        for track in Track:
            sections = []
            for section in self.catalog.get_sections(track):
                state = compute_section_state(section, self._completions)
                sections.append({
                    "key": section.key,
                    "title": section.title,
                    "completed": state.completed_count,
                    "total": state.total_count,
                    "completion_percent": state.completion_percent,
                })
            tracks[track.value] = {
                "completion_percent": self.get_track_progress(track),
                "sections": sections,
            }
        return {
            "user_id": self.user_id,
            "completed_items": len(self._completions & self.catalog.all_item_ids),
            "total_items": len(self.catalog.all_item_ids),
            "tracks": tracks,
        }

"""
Section renderer - Item cards with lock state for drills and modules.
"""

import html

from suraksha.schemas import ContentKind, ItemState, ItemStatus, SectionState


STATUS_ICONS = {
    ItemStatus.COMPLETED: "✅",
    ItemStatus.UNLOCKED: "▶️",
    ItemStatus.LOCKED: "🔒",
}

KIND_ICONS = {
    ContentKind.VIDEO: "🎥",
    ContentKind.PDF: "📄",
    ContentKind.ARTICLE: "📝",
}


def get_section_css() -> str:
    """Get CSS styles for section item cards."""
    return """
    <style>
    .item-card {
        border-radius: 10px;
        padding: 0.9em 1.2em;
        margin: 0.5em 0;
        border: 1px solid #e0e0e0;
        background: white;
    }
    .item-card.locked {
        opacity: 0.55;
        background: #f5f5f5;
    }
    .item-card.completed {
        border-left: 4px solid #388E3C;
    }
    .item-title {
        font-weight: 600;
        color: #333;
    }
    .item-meta {
        color: #777;
        font-size: 0.85em;
    }
    </style>
    """


def render_item_card(state: ItemState) -> str:
    """Render one item with its status icon, kind and duration."""
    item = state.item
    css = f"item-card {state.status.value}"
    meta = [KIND_ICONS[item.kind]]
    if item.duration:
        meta.append(f"Duration: {html.escape(item.duration)}")
    if item.lessons:
        meta.append(f"{item.lessons} Lessons")

    return (
        f'<div class="{css}">'
        f'<div class="item-title">{STATUS_ICONS[state.status]} '
        f'{item.order}. {html.escape(item.title)}</div>'
        f'<div>{html.escape(item.description)}</div>'
        f'<div class="item-meta">{" · ".join(meta)}</div>'
        f'</div>'
    )


def render_section_progress(state: SectionState) -> str:
    """Plain-text progress line for a section."""
    return f"{state.completed_count}/{state.total_count} completed ({state.completion_percent}%)"

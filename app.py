"""
Suraksha - Disaster Preparedness Learning Platform

Streamlit application for school disaster-safety training: video drills,
first aid courses, reading modules and a timed quiz.

Usage:
    streamlit run app.py
"""

import logging
import time

import streamlit as st

from suraksha.config import LOG_FORMAT, get_settings
from suraksha.errors import CatalogError, PersistError
from suraksha.classroom import (
    CatalogLoader,
    ProgressTracker,
    UnlockEngine,
    derive_achievements,
    overall_progress,
    summarize_student,
    summarize_class,
)
from suraksha.quiz import QuizSession
from suraksha.schemas import AttemptStatus, ContentKind, ItemStatus, Track
from suraksha.utils import percent_of
from suraksha.viewer import (
    format_time,
    get_quiz_css,
    get_section_css,
    render_item_card,
    render_question,
    render_quiz_score,
    render_review,
    render_section_progress,
    render_timer,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

SETTINGS = get_settings()

logging.basicConfig(level=SETTINGS.log_level, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

VIEWS = ["Drills", "First Aid", "Modules", "Quiz", "Dashboard"]
TRACK_FOR_VIEW = {
    "Drills": Track.DRILLS,
    "First Aid": Track.FIRST_AID,
    "Modules": Track.MODULES,
}

st.set_page_config(
    page_title="Suraksha",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "catalog" not in st.session_state:
        try:
            st.session_state.catalog = CatalogLoader(SETTINGS.catalog_path).load()
            st.session_state.catalog_error = None
        except (FileNotFoundError, CatalogError) as e:
            logger.error(f"Catalog unavailable: {e}")
            st.session_state.catalog = None
            st.session_state.catalog_error = str(e)

    if "progress" not in st.session_state:
        st.session_state.progress = ProgressTracker(SETTINGS.progress_db)

    if "user_id" not in st.session_state:
        st.session_state.user_id = "student"

    if "engine" not in st.session_state and st.session_state.catalog:
        st.session_state.engine = UnlockEngine(
            st.session_state.catalog,
            st.session_state.progress,
            st.session_state.user_id,
        )

    if "quiz" not in st.session_state:
        # The app drives the timer itself from wall-clock time on each rerun.
        st.session_state.quiz = QuizSession(
            result_sink=st.session_state.progress,
            auto_tick=False,
        )
        st.session_state.quiz_clock = None

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = VIEWS[0]


def switch_user(user_id: str):
    """Change the active student and reload their progress."""
    st.session_state.quiz.cancel()
    st.session_state.user_id = user_id
    st.session_state.engine = UnlockEngine(
        st.session_state.catalog,
        st.session_state.progress,
        user_id,
    )
    logger.info(f"Switched to user {user_id}")


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with student selector, progress and view choice."""
    st.sidebar.title("🛡️ Suraksha")

    if not st.session_state.catalog:
        st.sidebar.error("Catalog could not be loaded.")
        return

    user_id = st.sidebar.text_input("Student", value=st.session_state.user_id).strip()
    if user_id and user_id != st.session_state.user_id:
        switch_user(user_id)

    engine = st.session_state.engine
    summary = engine.get_progress_summary()
    percent = percent_of(summary["completed_items"], summary["total_items"])
    st.sidebar.markdown(
        f"**Progress:** {summary['completed_items']}/{summary['total_items']} items ({percent}%)"
    )
    st.sidebar.progress(percent / 100)

    st.sidebar.divider()

    st.sidebar.subheader("View")
    st.session_state.view_mode = st.sidebar.radio(
        "Select view",
        VIEWS,
        index=VIEWS.index(st.session_state.view_mode),
        label_visibility="collapsed",
    )


# -----------------------------------------------------------------------------
# Track View: Drills / First Aid / Modules
# -----------------------------------------------------------------------------

def render_track_view(track: Track):
    """Render every section of a track with its unlock chain."""
    engine = st.session_state.engine
    catalog = st.session_state.catalog

    st.title(st.session_state.view_mode)
    st.markdown(f"**Track progress:** {engine.get_track_progress(track)}%")
    st.markdown(get_section_css(), unsafe_allow_html=True)

    for section in catalog.get_sections(track):
        state = engine.get_section_state(section.key)
        recommended = engine.get_recommended_item_id(section.key)
        header = f"{section.icon or ''} {section.title}  ({render_section_progress(state)})"
        with st.expander(header, expanded=state.completion_percent < 100):
            if section.description:
                st.caption(section.description)
            st.progress(state.completion_percent / 100)
            for item_state in state.items:
                render_item(section.key, item_state, is_next=item_state.item.id == recommended)


def render_item(section_key: str, item_state, is_next: bool = False):
    """Render one item card with its media and completion button."""
    item = item_state.item
    if is_next:
        st.caption("▶ Up next")
    st.markdown(render_item_card(item_state), unsafe_allow_html=True)

    if item_state.status == ItemStatus.LOCKED:
        return

    if item.media_url:
        render_media(item)

    if item_state.status == ItemStatus.COMPLETED:
        st.success("Completed")
        if st.button("Mark as incomplete", key=f"reset_{section_key}_{item.id}"):
            uncomplete_item(item.id)
        return

    if st.button("Mark as complete", key=f"complete_{section_key}_{item.id}", type="primary"):
        complete_item(section_key, item.id)


def render_media(item):
    """Embed single videos; link playlists, articles and PDFs."""
    if item.kind == ContentKind.VIDEO and "videoseries" not in item.media_url:
        st.video(item.media_url.replace("/embed/", "/watch?v="))
    else:
        st.link_button("Open resource", item.media_url)


def complete_item(section_key: str, item_id: str):
    """Complete an item; roll back the optimistic update if saving fails."""
    engine = st.session_state.engine
    try:
        engine.mark_complete(item_id)
    except PersistError as e:
        engine.discard_completion(item_id)
        st.error(f"{e}. Please try again.")
        return
    next_id = engine.get_next_item_id(section_key, item_id)
    if next_id:
        st.toast("Next item unlocked!")
    st.rerun()


def uncomplete_item(item_id: str):
    """Clear a completion so the item can be repeated."""
    try:
        st.session_state.engine.mark_incomplete(item_id)
    except PersistError as e:
        st.error(f"{e}. Please try again.")
        return
    st.rerun()


# -----------------------------------------------------------------------------
# Quiz View
# -----------------------------------------------------------------------------

def advance_quiz_clock():
    """Apply wall-clock seconds since the last rerun to the attempt timer."""
    quiz = st.session_state.quiz
    if quiz.timer is None or not quiz.timer.is_running:
        return
    now = time.monotonic()
    last = st.session_state.quiz_clock or now
    whole = int(now - last)
    if whole > 0:
        quiz.timer.elapse(whole)
        last += whole
    st.session_state.quiz_clock = last


def render_quiz_view():
    """Render quiz selection, the running attempt, or the last result."""
    catalog = st.session_state.catalog
    quiz = st.session_state.quiz

    st.title("Disaster Management Quiz")
    st.markdown(get_quiz_css(), unsafe_allow_html=True)

    advance_quiz_clock()

    attempt = quiz.attempt
    if attempt is not None and attempt.is_open:
        render_running_attempt()
        return

    if quiz.last_result is not None and attempt is not None:
        render_attempt_result()
        st.divider()

    quiz_ids = list(catalog.banks)
    default = quiz_ids.index(SETTINGS.default_quiz_id) if SETTINGS.default_quiz_id in quiz_ids else 0
    quiz_id = st.selectbox(
        "Quiz",
        quiz_ids,
        index=default,
        format_func=lambda qid: catalog.banks[qid].title,
    )
    bank = catalog.get_bank(quiz_id)
    st.markdown(bank.description)
    st.markdown(
        f"**{bank.effective_sample_size} questions** · "
        f"**{format_time(bank.config.time_limit_seconds)}** · "
        f"pass mark **{bank.config.passing_threshold}%**"
    )

    if st.button("Start quiz", type="primary"):
        quiz.start_attempt(st.session_state.user_id, bank)
        st.session_state.quiz_clock = time.monotonic()
        st.rerun()

    render_quiz_history()


def render_running_attempt():
    """Render the countdown, questions and submit button."""
    quiz = st.session_state.quiz
    attempt = quiz.attempt
    total = len(attempt.questions)

    col1, col2 = st.columns([3, 1])
    with col1:
        st.markdown(f"Answered **{attempt.answered_count}/{total}**")
    with col2:
        st.markdown(render_timer(quiz.remaining_seconds), unsafe_allow_html=True)

    for sampled in attempt.questions:
        question = sampled.question
        st.markdown(
            render_question(sampled, total, attempt.answers.get(sampled.position)),
            unsafe_allow_html=True,
        )
        choice = st.radio(
            "Your answer",
            list(range(len(question.options))),
            index=attempt.answers.get(sampled.position),
            format_func=lambda i, q=question: q.options[i],
            key=f"answer_{attempt.attempt_id}_{sampled.position}",
            label_visibility="collapsed",
        )
        if choice is not None:
            quiz.select_answer(sampled.position, choice)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Submit quiz", type="primary", use_container_width=True):
            try:
                quiz.submit()
            except PersistError:
                pass  # shown with the result via last_persist_error
            st.rerun()
    with col2:
        if st.button("Abandon", use_container_width=True):
            quiz.cancel()
            st.rerun()

    # Keep the countdown moving between interactions.
    time.sleep(1)
    st.rerun()


def render_attempt_result():
    """Render the graded result with badge and per-question review."""
    quiz = st.session_state.quiz
    result = quiz.last_result

    if result.status == AttemptStatus.TIMED_OUT:
        st.warning("Time's up! Your answers were submitted automatically.")

    st.markdown(render_quiz_score(result), unsafe_allow_html=True)
    if result.passed:
        st.success(f"Passed! Completed in {format_time(result.elapsed_seconds)}.")
    else:
        st.info(f"You need {quiz.attempt.passing_threshold}% to pass. Keep practicing!")

    if quiz.last_persist_error is not None:
        st.error(f"{quiz.last_persist_error}. Your result is kept for this session.")
        if st.button("Retry saving"):
            try:
                quiz.retry_persist()
            except PersistError:
                pass
            st.rerun()

    with st.expander("Review answers"):
        st.markdown(render_review(result, quiz.attempt.questions), unsafe_allow_html=True)


def render_quiz_history():
    """Render the most recent attempts."""
    history = st.session_state.progress.get_attempt_history(
        st.session_state.user_id, limit=SETTINGS.history_limit
    )
    if not history:
        return

    st.subheader("Recent attempts")
    for result in history:
        st.markdown(
            f"- {result.completed_at:%Y-%m-%d %H:%M} · **{result.percentage}%** · "
            f"{result.badge.icon} {result.badge.label} · "
            f"{'passed' if result.passed else 'not passed'}"
        )


# -----------------------------------------------------------------------------
# Dashboard View
# -----------------------------------------------------------------------------

def render_dashboard_view():
    """Render the student dashboard and the class overview."""
    progress = st.session_state.progress
    user_id = st.session_state.user_id

    st.title("Dashboard")

    records = progress.get_completion_records(user_id)
    results = progress.get_attempt_history(user_id, limit=None)
    summary = summarize_student(user_id, records, results)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Overall progress", f"{overall_progress(records, results)}%")
    col2.metric("Items completed", summary.items_completed)
    col3.metric("Quizzes passed", summary.quizzes_passed)
    col4.metric("Average score", f"{summary.average_score}%")

    st.subheader("Achievements")
    achievements = derive_achievements(summary.items_completed, summary.quizzes_passed)
    if not achievements:
        st.info("Complete a drill or pass a quiz to earn your first achievement.")
    for achievement in achievements:
        st.markdown(f"🏅 **{achievement.name}** - {achievement.description}")

    st.subheader("Tracks")
    engine = st.session_state.engine
    for track in Track:
        st.markdown(f"**{track.value.replace('_', ' ').title()}**: {engine.get_track_progress(track)}%")
        st.progress(engine.get_track_progress(track) / 100)

    st.divider()
    st.subheader("Class overview")
    summaries = [
        summarize_student(
            uid,
            progress.get_completion_records(uid),
            progress.get_attempt_history(uid, limit=None),
        )
        for uid in progress.list_user_ids()
    ]
    overview = summarize_class(summaries)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Students", overview.total_students)
    col2.metric("Active this week", overview.active_students)
    col3.metric("Class average", f"{overview.average_score}%")
    col4.metric("Top performer", overview.top_performer or "-")

    if st.button("Reset my progress"):
        st.session_state.quiz.cancel()
        progress.reset_progress(user_id)
        engine.refresh()
        st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    if not st.session_state.catalog:
        st.error(f"Catalog could not be loaded: {st.session_state.catalog_error}")
        st.code("python scripts/check_catalog.py --catalog data/catalog.yaml")
        return

    view = st.session_state.view_mode
    if view in TRACK_FOR_VIEW:
        render_track_view(TRACK_FOR_VIEW[view])
    elif view == "Quiz":
        render_quiz_view()
    elif view == "Dashboard":
        render_dashboard_view()


if __name__ == "__main__":
    main()

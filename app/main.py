"""
Streamlit Frontend for Subscription Tracker

The page users interact with. It collects input, forwards each action
to the session's SubscriptionTracker and re-renders the list and totals.

DESIGN PRINCIPLES:
1. No validation here; the tracker decides what is valid
2. Rejected input stays in the boxes for correction
3. Successful adds clear the boxes
4. Delete and Reset take effect immediately

Each widget callback is one user intent. Streamlit runs callbacks one
at a time before the rerun, so the ledger sees one action at a time.
"""

import html
from uuid import UUID

import streamlit as st

from subtracker.config import get_settings, validate_all_settings
from subtracker.tracker import SubscriptionTracker, create_tracker


NAME_KEY = "service_name"
COST_KEY = "service_cost"


settings = get_settings().app

# Page configuration
st.set_page_config(
    page_title=settings.app_title,
    page_icon="💳",
    layout="centered",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .service-item {
        padding: 6px 0;
        font-size: 1.1em;
    }
</style>
""", unsafe_allow_html=True)


def get_tracker() -> SubscriptionTracker:
    """Get this session's tracker, creating it on first use."""
    if "tracker" not in st.session_state:
        st.session_state.tracker = create_tracker(settings)
    return st.session_state.tracker


def handle_add() -> None:
    tracker = get_tracker()
    try:
        ok, message = tracker.add_subscription(
            st.session_state.get(NAME_KEY, ""),
            st.session_state.get(COST_KEY, ""),
        )
    except Exception as e:
        tracker.audit_logger.log_error(
            error_type=type(e).__name__,
            error_message=str(e),
            details={"action": "add"},
        )
        st.session_state.add_error = f"Could not add this subscription: {e}"
        return
    if ok:
        st.session_state[NAME_KEY] = ""
        st.session_state[COST_KEY] = ""
        st.session_state.add_error = None
    else:
        st.session_state.add_error = message


def handle_delete(position: int, entry_id: UUID) -> None:
    get_tracker().delete_subscription(position, entry_id=entry_id)


def handle_reset() -> None:
    get_tracker().reset_all()
    st.session_state.add_error = None


def render_add_form() -> None:
    """Name and cost inputs. Enter in either box submits."""
    with st.form("add_subscription", clear_on_submit=False):
        col1, col2 = st.columns([3, 2])
        with col1:
            st.text_input(
                "Service name",
                key=NAME_KEY,
                placeholder="e.g. Netflix",
            )
        with col2:
            st.text_input(
                f"Monthly cost ({settings.currency_symbol})",
                key=COST_KEY,
                placeholder="e.g. 15.99",
            )
        st.form_submit_button("Add", type="primary", on_click=handle_add)

    if st.session_state.get("add_error"):
        st.error(st.session_state.add_error)


def render_list(tracker: SubscriptionTracker) -> None:
    """One row per subscription, each with its own Delete button."""
    st.subheader("Your subscriptions")

    rows = tracker.rows()
    if not rows:
        st.info("No subscriptions yet. Add one above.")
        return

    for row in rows:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(
                f'<div class="service-item">{html.escape(row.label)}</div>',
                unsafe_allow_html=True,
            )
        with col2:
            st.button(
                "Delete",
                key=f"delete_{row.entry_id}",
                on_click=handle_delete,
                args=(row.position, row.entry_id),
            )


def render_totals(tracker: SubscriptionTracker) -> None:
    st.subheader("Totals")
    totals = tracker.formatted_totals()

    col1, col2, col3 = st.columns(3)
    col1.metric("Monthly", totals["monthly"])
    col2.metric("Annual", totals["annual"])
    col3.metric("5 Years", totals["five_year"])


def render_settings_status() -> None:
    """Configuration check, shown in debug mode."""
    with st.expander("Settings"):
        status = validate_all_settings()
        if status.get("app", False):
            st.success("Settings loaded")
        else:
            st.error(f"Settings invalid: {status.get('app_error', 'unknown error')}")


def render_history(tracker: SubscriptionTracker) -> None:
    with st.expander("Recent activity"):
        events = tracker.audit_logger.recent(limit=20)
        if not events:
            st.markdown("*Nothing yet.*")
        for event in events:
            st.markdown(
                f"`{event.timestamp:%H:%M:%S}` {event.description}"
            )


def main():
    """Main application entry point."""
    tracker = get_tracker()

    st.title(f"💳 {settings.app_title}")
    st.markdown("Add your recurring services to see what they really cost.")

    render_add_form()
    st.markdown("---")
    render_list(tracker)
    st.markdown("---")
    render_totals(tracker)

    st.button("Reset", on_click=handle_reset)

    if settings.debug_mode:
        render_settings_status()
        render_history(tracker)


if __name__ == "__main__":
    main()

"""Streamlit UI - document tagger and wedding planner tabs.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import random  # noqa: E402
from typing import Any  # noqa: E402

import httpx  # noqa: E402
import streamlit as st  # noqa: E402

from backend.app.config import get_settings  # noqa: E402
from ui.helpers import (  # noqa: E402
    BUDGET_CATEGORIES,
    LOADING_MESSAGES,
    SECTIONS,
    ApiError,
    call_refresh_section,
    call_tag,
    call_wedding_plan,
    format_size_mb,
    format_thousands,
    parse_thousands,
    replace_section,
    search_locations,
    split_tags,
    validate_upload,
    venue_contact,
    venue_title,
)

# Configuration
settings = get_settings()
BACKEND_URL = settings.backend_url

# Page config
st.set_page_config(
    page_title="AI Utilities",
    page_icon="🧠",
    layout="wide",
)

# Initialize session state
for key, default in {
    "tags": [],
    "tag_error": None,
    "plan": None,
    "plan_error": None,
    "generating": False,
    "refreshing": None,
    "plan_inputs": None,
}.items():
    if key not in st.session_state:
        st.session_state[key] = default


@st.cache_data(ttl=300, show_spinner=False)
def cached_location_search(query: str) -> list[dict[str, Any]]:
    """Nominatim lookup, cached per query."""
    try:
        return search_locations(query, settings.geocoder_url, settings.geocoder_user_agent)
    except httpx.HTTPError:
        return []


def _format_number_input(key: str) -> None:
    st.session_state[key] = format_thousands(st.session_state[key])


def render_venue(venue: dict[str, Any]) -> None:
    """Render one venue card."""
    st.markdown(f"**{venue_title(venue)}**")
    st.caption(f"📍 {venue.get('address', 'Address not available')}")
    st.markdown(f"💰 {venue.get('price', 'Price not available')}")
    contact = venue_contact(venue)
    if contact:
        st.markdown(contact)


def refresh(section_type: str) -> None:
    """Button callback: replace one section with a different option."""
    plan = st.session_state.plan
    inputs = st.session_state.plan_inputs
    if not plan or not inputs:
        return

    st.session_state.refreshing = section_type
    try:
        new_content = call_refresh_section(
            backend_url=BACKEND_URL,
            location=inputs["location"],
            budget=inputs["budget"],
            attendees=inputs["attendees"],
            section_type=section_type,
            current_content=plan[section_type],
            existing_plan=plan,
        )
        st.session_state.plan = replace_section(plan, section_type, new_content)
        st.session_state.plan_error = None
    except (ApiError, httpx.HTTPError) as e:
        st.session_state.plan_error = str(e)
    finally:
        st.session_state.refreshing = None


st.title("🧠 AI Utilities")
st.markdown("*AI-powered tools for work and life*")
st.divider()

tab_tagger, tab_planner = st.tabs(["📄 Document Parser", "💍 Wedding Planner"])

# =============================================================================
# DOCUMENT PARSER
# =============================================================================
with tab_tagger:
    st.subheader("AI Document Parser")
    st.caption("Upload a PDF and get searchable tags and key topics.")

    uploaded = st.file_uploader("PDF document (max 1MB)", type=["pdf"])

    upload_error = None
    if uploaded is not None:
        upload_error = validate_upload(uploaded.name, uploaded.type, uploaded.size)
        if upload_error:
            st.error(f"❌ {upload_error}")
        else:
            st.caption(f"{uploaded.name} • Ready for analysis • {format_size_mb(uploaded.size)}")

    col_extract, col_reset = st.columns([1, 1])
    with col_extract:
        extract_clicked = st.button(
            "🔍 Extract tags",
            type="primary",
            disabled=uploaded is None or upload_error is not None,
            use_container_width=True,
        )
    with col_reset:
        if st.button("↺ Reset", use_container_width=True):
            st.session_state.tags = []
            st.session_state.tag_error = None

    if extract_clicked and uploaded is not None:
        st.session_state.tags = []
        st.session_state.tag_error = None
        with st.spinner("Analyzing document..."):
            try:
                tags = call_tag(BACKEND_URL, uploaded.name, uploaded.getvalue())
                st.session_state.tags = split_tags(tags)
            except (ApiError, httpx.HTTPError) as e:
                st.session_state.tag_error = str(e)

    if st.session_state.tag_error:
        st.error(f"❌ {st.session_state.tag_error}")

    if st.session_state.tags:
        st.markdown(f"#### Tags ({len(st.session_state.tags)})")
        st.markdown(" ".join(f"`{tag}`" for tag in st.session_state.tags))

# =============================================================================
# WEDDING PLANNER
# =============================================================================
with tab_planner:
    st.subheader("AI Wedding Planner")
    st.caption("Find bookable venues for every part of your celebration.")

    col_form, col_plan = st.columns([1, 2])

    with col_form:
        query = st.text_input("Wedding location *", placeholder="Start typing a city or venue area")
        suggestions = cached_location_search(query) if query else []
        location = None
        if suggestions:
            location = st.selectbox(
                "Select a location",
                options=[s["display_name"] for s in suggestions],
            )
        elif len(query.strip()) >= 2:
            st.caption("No matching places found.")

        st.text_input(
            "Budget (USD)",
            key="budget_raw",
            placeholder="25,000",
            on_change=_format_number_input,
            args=("budget_raw",),
        )
        st.text_input(
            "Guests",
            key="attendees_raw",
            placeholder="150",
            on_change=_format_number_input,
            args=("attendees_raw",),
        )

        plan_clicked = st.button(
            "💍 Plan my wedding",
            type="primary",
            disabled=location is None or st.session_state.generating,
            use_container_width=True,
        )

        if plan_clicked and location:
            inputs = {
                "location": location,
                "budget": parse_thousands(st.session_state.get("budget_raw", "")),
                "attendees": parse_thousands(st.session_state.get("attendees_raw", "")),
            }
            icon, message, subtext = random.choice(LOADING_MESSAGES)
            st.session_state.generating = True
            st.session_state.plan_error = None
            try:
                with st.spinner(f"{icon} {message} {subtext}"):
                    st.session_state.plan = call_wedding_plan(backend_url=BACKEND_URL, **inputs)
                st.session_state.plan_inputs = inputs
            except (ApiError, httpx.HTTPError) as e:
                st.session_state.plan_error = str(e)
            finally:
                st.session_state.generating = False

        if st.session_state.plan_error:
            st.error(f"❌ {st.session_state.plan_error}")

    with col_plan:
        plan = st.session_state.plan
        if not plan:
            st.info("👈 Choose a location and hit **Plan my wedding** to see venues here.")
        else:
            st.markdown(f"### Your wedding near {st.session_state.plan_inputs['location']}")

            for section_type, title, icon in SECTIONS:
                content = plan.get(section_type)
                if content is None:
                    continue
                with st.container(border=True):
                    st.markdown(f"#### {icon} {title}")
                    if isinstance(content, list):
                        for column, venue in zip(st.columns(len(content) or 1), content):
                            with column:
                                render_venue(venue)
                    else:
                        render_venue(content)
                    st.button(
                        "🔄 Show a different option",
                        key=f"refresh_{section_type}",
                        on_click=refresh,
                        args=(section_type,),
                        disabled=st.session_state.refreshing == section_type,
                    )

            budget_estimate = plan.get("estimatedBudget")
            if budget_estimate:
                with st.container(border=True):
                    st.markdown("#### 💵 Estimated Budget")
                    st.markdown(f"**Total:** {budget_estimate.get('total', 'N/A')}")
                    breakdown = budget_estimate.get("breakdown", {})
                    for key, label in BUDGET_CATEGORIES:
                        if key in breakdown:
                            st.markdown(f"- {label}: {breakdown[key]}")

            with st.expander("🔧 Raw JSON Response (dev)"):
                st.json(plan)

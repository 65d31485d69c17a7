"""Helper functions for UI - backend API client, geocoding and formatting."""

import re
from typing import Any

import httpx

MAX_UPLOAD_BYTES = 1024 * 1024
PDF_MEDIA_TYPE = "application/pdf"

# Plan sections in display order: (key, title, icon)
SECTIONS = [
    ("weddingLocations", "Ceremony Venues", "⛪"),
    ("receptionLocation", "Reception Venue", "🥂"),
    ("receptionDinner", "Reception Dinner", "🍽️"),
    ("catering", "Catering", "🍰"),
    ("welcomeParty", "Welcome Party", "🎉"),
    ("afterPartyLocation", "After Party", "🎶"),
]

BUDGET_CATEGORIES = [
    ("ceremony", "Ceremony"),
    ("reception", "Reception"),
    ("catering", "Catering"),
    ("welcomeParty", "Welcome Party"),
    ("afterParty", "After Party"),
]

LOADING_MESSAGES = [
    ("💒", "Finding the perfect venues for your special day...",
     "Searching through hundreds of romantic locations"),
    ("⛪", "Discovering beautiful ceremony locations...",
     "Looking for venues that match your style and budget"),
    ("🍽️", "Curating exceptional catering options...",
     "Finding caterers known for their exquisite cuisine"),
    ("🎉", "Planning your welcome party experience...",
     "Selecting venues perfect for greeting your guests"),
    ("🎶", "Designing your after-party celebration...",
     "Finding spots to dance the night away"),
    ("📸", "Considering photo opportunities...",
     "Ensuring your venues are picture-perfect"),
    ("💵", "Calculating budget-friendly options...",
     "Making sure everything fits within your budget"),
    ("🎂", "Adding special touches to your day...",
     "Thinking about those memorable details"),
    ("🎁", "Putting the finishing touches together...",
     "Almost ready to present your dream wedding plan"),
]


class ApiError(Exception):
    """Backend returned an error response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# --- Client-side validation and formatting ---


def validate_upload(filename: str, content_type: str | None, size: int) -> str | None:
    """Check a selected file before upload.

    Returns:
        Error message, or None if the file can be sent
    """
    if content_type != PDF_MEDIA_TYPE and not filename.lower().endswith(".pdf"):
        return "Please select a PDF file"
    if size > MAX_UPLOAD_BYTES:
        return "File size must be less than 1MB"
    return None


def format_size_mb(size: int) -> str:
    """Format a byte count as megabytes with two decimals."""
    return f"{size / 1024 / 1024:.2f} MB"


def format_thousands(value: str) -> str:
    """Keep only digits and group them with commas ("25000" -> "25,000")."""
    digits = re.sub(r"\D", "", value)
    if not digits:
        return ""
    return f"{int(digits):,}"


def parse_thousands(value: str) -> int | None:
    """Parse a comma-grouped number; empty input or 0 means unspecified."""
    digits = re.sub(r"\D", "", value)
    if not digits:
        return None
    return int(digits) or None


def split_tags(tags: str) -> list[str]:
    """Split the comma-separated tag string returned by /api/tag."""
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


def venue_title(venue: dict[str, Any]) -> str:
    """Venue name, or caterer company name."""
    return str(venue.get("name") or venue.get("company") or "Unnamed venue")


def venue_contact(venue: dict[str, Any]) -> str | None:
    """Markdown for the venue's website link or phone number."""
    website = venue.get("website")
    if website:
        return f"[Visit website]({website})"
    phone = venue.get("phone")
    if phone:
        return f"📞 {phone}"
    return None


# --- HTTP calls ---


def _raise_for_error(response: httpx.Response, default_message: str) -> None:
    if not response.is_error:
        return
    try:
        message = response.json().get("error") or default_message
    except ValueError:
        message = default_message
    raise ApiError(message, status_code=response.status_code)


def search_locations(
    query: str,
    geocoder_url: str,
    user_agent: str,
    limit: int = 5,
) -> list[dict[str, Any]]:
    """Look up place suggestions for the location autocomplete.

    Queries shorter than two characters are not sent.

    Args:
        query: Free-text place search
        geocoder_url: Nominatim search endpoint
        user_agent: Identifying User-Agent (required by Nominatim policy)
        limit: Maximum suggestions

    Returns:
        Suggestions with display_name, lat, lon and place_id
    """
    if len(query.strip()) < 2:
        return []

    response = httpx.get(
        geocoder_url,
        params={"format": "json", "q": query, "limit": limit, "addressdetails": 1},
        headers={"User-Agent": user_agent},
        timeout=10.0,
    )
    response.raise_for_status()
    result: list[dict[str, Any]] = response.json()
    return result


def call_tag(backend_url: str, filename: str, data: bytes) -> str:
    """Upload a PDF to /api/tag.

    Returns:
        Comma-separated tags

    Raises:
        ApiError: If the backend rejects the file or fails
    """
    response = httpx.post(
        f"{backend_url}/api/tag",
        files={"pdf": (filename, data, PDF_MEDIA_TYPE)},
        timeout=120.0,
    )
    _raise_for_error(response, "Failed to process document")
    tags: str = response.json().get("tags", "")
    return tags


def call_wedding_plan(
    backend_url: str,
    location: str,
    budget: int | None,
    attendees: int | None,
) -> dict[str, Any]:
    """Call /api/wedding.

    Returns:
        WeddingPlan dict

    Raises:
        ApiError: If the request fails
    """
    response = httpx.post(
        f"{backend_url}/api/wedding",
        json={"location": location, "budget": budget, "attendees": attendees},
        timeout=180.0,
    )
    _raise_for_error(response, "Failed to generate wedding plan")
    result: dict[str, Any] = response.json()
    return result


def call_refresh_section(
    backend_url: str,
    location: str,
    budget: int | None,
    attendees: int | None,
    section_type: str,
    current_content: dict[str, Any] | list[dict[str, Any]],
    existing_plan: dict[str, Any],
) -> dict[str, Any] | list[dict[str, Any]]:
    """Call /api/wedding/refresh for one section.

    Returns:
        The section's new content

    Raises:
        ApiError: If the request fails
    """
    response = httpx.post(
        f"{backend_url}/api/wedding/refresh",
        json={
            "location": location,
            "budget": budget,
            "attendees": attendees,
            "sectionType": section_type,
            "currentContent": current_content,
            "existingPlan": existing_plan,
        },
        timeout=120.0,
    )
    _raise_for_error(response, "Failed to refresh section")
    new_content: dict[str, Any] | list[dict[str, Any]] = response.json()["newContent"]
    return new_content


def replace_section(
    plan: dict[str, Any],
    section_type: str,
    new_content: dict[str, Any] | list[dict[str, Any]],
) -> dict[str, Any]:
    """Return a copy of the plan with one section replaced."""
    return {**plan, section_type: new_content}

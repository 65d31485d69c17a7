"""Unit tests for UI helper functions."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from ui.helpers import (
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

BACKEND = "http://backend.test"


def _response(status_code: int, body: object, url: str = f"{BACKEND}/api") -> httpx.Response:
    return httpx.Response(status_code, json=body, request=httpx.Request("POST", url))


class TestUploadValidation:
    """Client-side checks before upload."""

    def test_accepts_small_pdf(self) -> None:
        assert validate_upload("report.pdf", "application/pdf", 1024) is None

    def test_accepts_pdf_extension_without_media_type(self) -> None:
        assert validate_upload("REPORT.PDF", None, 1024) is None

    def test_rejects_non_pdf(self) -> None:
        assert validate_upload("notes.txt", "text/plain", 10) == "Please select a PDF file"

    def test_rejects_large_file(self) -> None:
        assert (
            validate_upload("big.pdf", "application/pdf", 1024 * 1024 + 1)
            == "File size must be less than 1MB"
        )

    def test_format_size_mb(self) -> None:
        assert format_size_mb(1024 * 1024) == "1.00 MB"
        assert format_size_mb(512 * 1024) == "0.50 MB"


class TestNumberFormatting:
    """Thousands separators on budget and guest inputs."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("25000", "25,000"), ("1,200", "1,200"), ("$5000abc", "5,000"), ("", ""), ("abc", "")],
    )
    def test_format_thousands(self, raw: str, expected: str) -> None:
        assert format_thousands(raw) == expected

    def test_parse_thousands(self) -> None:
        assert parse_thousands("25,000") == 25000
        assert parse_thousands("") is None
        assert parse_thousands("0") is None
        assert parse_thousands("0,000") is None


class TestDisplayHelpers:
    """Tag and venue display."""

    def test_split_tags(self) -> None:
        assert split_tags("business, finance , ,quarterly-report") == [
            "business",
            "finance",
            "quarterly-report",
        ]

    def test_venue_title_prefers_name(self) -> None:
        assert venue_title({"name": "Grand Hall", "company": "X"}) == "Grand Hall"
        assert venue_title({"company": "Fork & Knife Co"}) == "Fork & Knife Co"
        assert venue_title({}) == "Unnamed venue"

    def test_venue_contact(self) -> None:
        assert venue_contact({"website": "https://a.example"}) == "[Visit website](https://a.example)"
        assert venue_contact({"phone": "555-1234"}) == "📞 555-1234"
        assert venue_contact({"name": "No contact"}) is None

    def test_replace_section_leaves_original_untouched(self) -> None:
        plan = {"catering": {"company": "Old"}, "welcomeParty": {"name": "Bar"}}

        updated = replace_section(plan, "catering", {"company": "New"})

        assert updated["catering"] == {"company": "New"}
        assert updated["welcomeParty"] == {"name": "Bar"}
        assert plan["catering"] == {"company": "Old"}


class TestLocationSearch:
    """Nominatim autocomplete."""

    def test_short_query_is_not_sent(self) -> None:
        with patch("ui.helpers.httpx.get") as mock_get:
            assert search_locations("a", "http://geo.test/search", "ua") == []
            mock_get.assert_not_called()

    def test_returns_suggestions(self) -> None:
        suggestions = [{"display_name": "Austin, Texas, USA", "lat": "30.2", "lon": "-97.7"}]
        with patch("ui.helpers.httpx.get") as mock_get:
            mock_get.return_value = httpx.Response(
                200, json=suggestions, request=httpx.Request("GET", "http://geo.test/search")
            )

            result = search_locations("Austin", "http://geo.test/search", "wedding-ui", limit=3)

        assert result == suggestions
        kwargs = mock_get.call_args.kwargs
        assert kwargs["params"] == {"format": "json", "q": "Austin", "limit": 3, "addressdetails": 1}
        assert kwargs["headers"] == {"User-Agent": "wedding-ui"}


class TestBackendCalls:
    """HTTP calls to the API."""

    @patch("ui.helpers.httpx.post")
    def test_call_tag(self, mock_post: MagicMock) -> None:
        mock_post.return_value = _response(200, {"tags": "a, b"})

        assert call_tag(BACKEND, "doc.pdf", b"%PDF") == "a, b"
        assert mock_post.call_args.args[0] == f"{BACKEND}/api/tag"
        assert mock_post.call_args.kwargs["files"] == {"pdf": ("doc.pdf", b"%PDF", "application/pdf")}

    @patch("ui.helpers.httpx.post")
    def test_call_tag_surfaces_backend_message(self, mock_post: MagicMock) -> None:
        mock_post.return_value = _response(400, {"error": "File must be a PDF"})

        with pytest.raises(ApiError, match="File must be a PDF") as exc_info:
            call_tag(BACKEND, "doc.pdf", b"x")

        assert exc_info.value.status_code == 400

    @patch("ui.helpers.httpx.post")
    def test_call_wedding_plan_falls_back_to_default_message(self, mock_post: MagicMock) -> None:
        mock_post.return_value = httpx.Response(
            502, text="Bad Gateway", request=httpx.Request("POST", f"{BACKEND}/api/wedding")
        )

        with pytest.raises(ApiError, match="Failed to generate wedding plan"):
            call_wedding_plan(BACKEND, "Austin", 25000, None)

    @patch("ui.helpers.httpx.post")
    def test_call_wedding_plan_sends_inputs(self, mock_post: MagicMock) -> None:
        mock_post.return_value = _response(200, {"catering": {}})

        assert call_wedding_plan(BACKEND, "Austin", 25000, 120) == {"catering": {}}
        assert mock_post.call_args.kwargs["json"] == {
            "location": "Austin",
            "budget": 25000,
            "attendees": 120,
        }

    @patch("ui.helpers.httpx.post")
    def test_call_refresh_section(self, mock_post: MagicMock) -> None:
        new_content = {"name": "Grand Hall", "address": "1", "price": "$1"}
        mock_post.return_value = _response(200, {"newContent": new_content})

        result = call_refresh_section(
            BACKEND, "Austin", None, None, "receptionLocation", {"name": "Old"}, {"x": 1}
        )

        assert result == new_content
        body = mock_post.call_args.kwargs["json"]
        assert body["sectionType"] == "receptionLocation"
        assert body["currentContent"] == {"name": "Old"}
        assert body["existingPlan"] == {"x": 1}

"""Shared test doubles and sample payloads."""

import io
import json
from typing import Any

from pypdf import PdfWriter


class FakeCompletionClient:
    """Completion client returning scripted responses in order.

    Each scripted item is either a string (returned) or an exception
    (raised). Calls are recorded for assertions.
    """

    def __init__(self, *responses: str | Exception) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def script(self, *responses: str | Exception) -> None:
        """Queue more responses."""
        self._responses.extend(responses)

    async def complete(
        self,
        *,
        messages: list[dict[str, str]],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        self.calls.append(
            {"messages": messages, "temperature": temperature, "max_tokens": max_tokens}
        )
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def venue(name: str, **extra: str) -> dict[str, str]:
    """Venue dict as the model would return it."""
    return {"name": name, "address": f"{name} Street 1", "price": "$1,000 - $2,000", **extra}


def sample_plan() -> dict[str, Any]:
    """A complete WeddingPlan payload."""
    return {
        "receptionDinner": venue("Dinner Hall", website="https://dinner.example"),
        "welcomeParty": venue("Welcome Bar", phone="555-0100"),
        "catering": {
            "company": "Fork & Knife Co",
            "address": "9 Elm Rd",
            "price": "$85 per person",
            "phone": "555-0101",
        },
        "weddingLocations": [venue("Chapel A"), venue("Garden B"), venue("Barn C")],
        "receptionLocation": venue("Grand Ballroom", website="https://ballroom.example"),
        "afterPartyLocation": venue("Night Owl", phone="555-0102"),
        "estimatedBudget": {
            "total": "$30,000 - $40,000",
            "breakdown": {
                "ceremony": "$3,000",
                "reception": "$12,000",
                "catering": "$10,000",
                "welcomeParty": "$2,000",
                "afterParty": "$1,500",
            },
        },
    }


def sample_plan_completion() -> str:
    """The sample plan wrapped in prose, as a model tends to answer."""
    return f"Here is your wedding plan:\n\n{json.dumps(sample_plan(), indent=2)}\n\nEnjoy!"


def blank_pdf() -> bytes:
    """A valid one-page PDF with no text."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()

"""Wedding venue planning - prompts, generation and section refresh.

The model is asked to answer in a fixed JSON shape. Its completion goes
through the extractor and is then validated against the pydantic contract,
so a plan missing a section fails cleanly instead of reaching the client.
"""

import json
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from backend.app.config import Settings
from backend.app.errors import InvalidParameterError, SchemaMismatchError
from backend.app.llm.client import CompletionClient
from backend.app.llm.extract import Expect, extract_json
from backend.app.llm.retry import CompletionExecutor, CompletionRequest, RetryConfig
from backend.app.models.venue import VenueInfo
from backend.app.models.wedding import (
    PlanRequest,
    SectionRefreshRequest,
    SectionType,
    WeddingPlan,
)

logger = logging.getLogger(__name__)

SECTION_NAMES: dict[SectionType, str] = {
    SectionType.reception_dinner: "Reception Dinner Venue",
    SectionType.welcome_party: "Welcome Party Venue",
    SectionType.catering: "Catering Services",
    SectionType.wedding_locations: "Wedding Ceremony Venues",
    SectionType.reception_location: "Reception Venue",
    SectionType.after_party_location: "After Party Venue",
}

CEREMONY_OPTION_COUNT = 3

_venue_adapter = TypeAdapter(VenueInfo)
_ceremony_adapter = TypeAdapter(list[VenueInfo])

PLAN_JSON_TEMPLATE = """{
  "receptionDinner": {
    "name": "Venue Name",
    "address": "Full address",
    "price": "$X,XXX - $X,XXX",
    "website": "https://website.com" OR "phone": "phone number"
  },
  "welcomeParty": {
    "name": "Venue Name",
    "address": "Full address",
    "price": "$X,XXX - $X,XXX",
    "website": "https://website.com" OR "phone": "phone number"
  },
  "catering": {
    "company": "Catering Company Name",
    "address": "Full address",
    "price": "$XX per person",
    "website": "https://website.com" OR "phone": "phone number"
  },
  "weddingLocations": [
    {
      "name": "Ceremony Venue 1",
      "address": "Full address",
      "price": "$X,XXX - $X,XXX",
      "website": "https://website.com" OR "phone": "phone number"
    },
    {
      "name": "Ceremony Venue 2",
      "address": "Full address",
      "price": "$X,XXX - $X,XXX",
      "website": "https://website.com" OR "phone": "phone number"
    },
    {
      "name": "Ceremony Venue 3",
      "address": "Full address",
      "price": "$X,XXX - $X,XXX",
      "website": "https://website.com" OR "phone": "phone number"
    }
  ],
  "receptionLocation": {
    "name": "Reception Venue Name",
    "address": "Full address",
    "price": "$X,XXX - $X,XXX",
    "website": "https://website.com" OR "phone": "phone number"
  },
  "afterPartyLocation": {
    "name": "After Party Venue Name",
    "address": "Full address",
    "price": "$XXX - $X,XXX",
    "website": "https://website.com" OR "phone": "phone number"
  },
  "estimatedBudget": {
    "total": "Total estimated cost range",
    "breakdown": {
      "ceremony": "Estimated ceremony costs",
      "reception": "Estimated reception costs",
      "catering": "Estimated catering costs",
      "welcomeParty": "Estimated welcome party costs",
      "afterParty": "Estimated after party costs"
    }
  }
}"""

SPECIALIST_PROMPT = (
    "You are a wedding venue booking specialist. Provide ONLY venue names, addresses, "
    "estimated booking prices, and contact information. DO NOT include descriptions or "
    "summaries."
)


def parse_section_type(value: str) -> SectionType:
    """Map a wire section key to SectionType.

    Raises:
        InvalidParameterError: If the key is not one of the six sections
    """
    try:
        return SectionType(value)
    except ValueError as e:
        raise InvalidParameterError("Unknown section type") from e


def _schema_errors(error: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in item['loc']) or '<root>'}: {item['msg']}"
        for item in error.errors()
    ]


def validate_wedding_plan(data: Any) -> WeddingPlan:
    """Validate a parsed completion as a WeddingPlan.

    Raises:
        SchemaMismatchError: If any section is missing or malformed
    """
    try:
        return WeddingPlan.model_validate(data)
    except ValidationError as e:
        errors = _schema_errors(e)
        logger.error(f"Wedding plan failed schema validation: {errors}")
        raise SchemaMismatchError("Completion does not match the wedding plan shape", errors) from e


def validate_section_content(section: SectionType, data: Any) -> VenueInfo | list[VenueInfo]:
    """Validate a parsed completion as the content of one section.

    Raises:
        SchemaMismatchError: If the content does not fit the section
    """
    try:
        if section == SectionType.wedding_locations:
            venues = _ceremony_adapter.validate_python(data)
            if len(venues) != CEREMONY_OPTION_COUNT:
                raise SchemaMismatchError(
                    "Completion does not match the section shape",
                    [f"expected {CEREMONY_OPTION_COUNT} ceremony venues, got {len(venues)}"],
                )
            return venues
        return _venue_adapter.validate_python(data)
    except ValidationError as e:
        errors = _schema_errors(e)
        logger.error(f"Section {section.value} failed schema validation: {errors}")
        raise SchemaMismatchError("Completion does not match the section shape", errors) from e


def budget_sentence(budget: int | None, *, refresh: bool = False) -> str:
    """Sentence describing the budget constraint."""
    if budget:
        if refresh:
            return (
                f"The couple has a maximum budget of ${budget:,}. "
                "Please ensure the new recommendation fits within this budget."
            )
        return (
            f"The couple has a maximum budget of ${budget:,}. Please ensure all "
            "recommendations fit within this budget and provide specific booking prices."
        )
    if refresh:
        return "Please provide cost estimates for the new recommendation."
    return "Please provide estimated booking costs for each venue."


def attendees_sentence(attendees: int | None, *, refresh: bool = False) -> str:
    """Sentence describing the guest count constraint."""
    if attendees:
        target = "the venue can" if refresh else "all venue recommendations can"
        return (
            f"The wedding will have approximately {attendees:,} guests. "
            f"Please ensure {target} accommodate this number of people."
        )
    return "Please consider typical wedding guest counts when recommending venues."


def build_plan_messages(request: PlanRequest) -> list[dict[str, str]]:
    """Build chat messages for a full wedding plan."""
    location = request.location
    budget = budget_sentence(request.budget)
    attendees = attendees_sentence(request.attendees)

    user_prompt = (
        f"Find bookable wedding venues near {location}. {budget} {attendees} "
        f"Provide recommendations in this exact JSON format:\n\n{PLAN_JSON_TEMPLATE}\n\n"
        "IMPORTANT:\n"
        f"- Include ONLY real, bookable venues near {location}\n"
        "- Provide actual venue names, not generic descriptions\n"
        "- Include website URLs when available, phone numbers when websites aren't available\n"
        "- Focus on venues that can actually be booked for weddings\n"
        "- Provide realistic pricing estimates\n"
        f"- {budget}\n"
        f"- {attendees}"
    )

    return [
        {
            "role": "system",
            "content": f"{SPECIALIST_PROMPT} Focus on bookable venues with real contact "
            f"details. {budget} {attendees}",
        },
        {
            "role": "system",
            "content": "You will provide wedding venue booking information in a structured "
            "JSON format. Include only essential booking details: venue name, address, "
            "price, website URL (if available), or phone number.",
        },
        {"role": "user", "content": user_prompt},
    ]


def _return_format(section: SectionType) -> str:
    if section == SectionType.catering:
        return (
            'Return in JSON format: {"company": "name", "address": "address", '
            '"price": "price", "website": "url" OR "phone": "number"}'
        )
    if section == SectionType.wedding_locations:
        return (
            f"Return as an array of {CEREMONY_OPTION_COUNT} different venue options: "
            '[{"name": "venue name", "address": "address", "price": "price", '
            '"website": "url" OR "phone": "number"}, ...]'
        )
    return (
        'Return in JSON format: {"name": "venue name", "address": "address", '
        '"price": "price", "website": "url" OR "phone": "number"}'
    )


def build_refresh_messages(
    request: SectionRefreshRequest, section: SectionType
) -> list[dict[str, str]]:
    """Build chat messages asking for a different option for one section."""
    location = request.location
    section_name = SECTION_NAMES[section]
    budget = budget_sentence(request.budget, refresh=True)
    attendees = attendees_sentence(request.attendees, refresh=True)
    budget_rule = (
        f"Within the budget of ${request.budget:,}" if request.budget else "Cost-effective"
    )
    attendees_rule = (
        f"Can accommodate {request.attendees:,} guests"
        if request.attendees
        else "Suitable for wedding guest counts"
    )

    user_prompt = (
        f"I'm planning a wedding near {location}. {budget} {attendees}\n\n"
        f"Current {section_name}: {json.dumps(request.current_content)}\n\n"
        f"Please provide a DIFFERENT {section_name} option. Make sure it's:\n"
        "1. A completely different venue from the current one\n"
        f"2. Bookable and real venue near {location}\n"
        f"3. {budget_rule}\n"
        f"4. {attendees_rule}\n"
        "5. Include actual venue name, address, pricing, and website/phone\n\n"
        f"{_return_format(section)}"
    )

    return [
        {
            "role": "system",
            "content": f"{SPECIALIST_PROMPT} The user wants a different {section_name} option.",
        },
        {"role": "user", "content": user_prompt},
    ]


async def generate_wedding_plan(
    request: PlanRequest,
    client: CompletionClient,
    settings: Settings,
    executor: CompletionExecutor | None = None,
) -> WeddingPlan:
    """Ask the model for a full plan and validate it.

    Raises:
        ProviderError, UnparsableCompletionError, SchemaMismatchError:
            When every attempt failed
    """

    def parse(content: str) -> WeddingPlan:
        return validate_wedding_plan(extract_json(content, expect="object"))

    executor = executor or CompletionExecutor()
    return await executor.execute(
        client,
        CompletionRequest(
            operation="wedding_plan",
            messages=build_plan_messages(request),
            temperature=settings.plan_temperature,
            max_tokens=settings.plan_max_tokens,
        ),
        parse,
        RetryConfig.from_settings(settings),
    )


async def refresh_section(
    request: SectionRefreshRequest,
    section: SectionType,
    client: CompletionClient,
    settings: Settings,
    executor: CompletionExecutor | None = None,
) -> VenueInfo | list[VenueInfo]:
    """Ask the model for a different option for one section.

    ``request.existing_plan`` is accepted for context but not used.
    """
    expect: Expect = "array" if section == SectionType.wedding_locations else "object"

    def parse(content: str) -> VenueInfo | list[VenueInfo]:
        return validate_section_content(section, extract_json(content, expect=expect))

    executor = executor or CompletionExecutor()
    return await executor.execute(
        client,
        CompletionRequest(
            operation="wedding_refresh",
            messages=build_refresh_messages(request, section),
            temperature=settings.refresh_temperature,
            max_tokens=settings.refresh_max_tokens,
        ),
        parse,
        RetryConfig.from_settings(settings),
    )

"""Venue models - the common shape of every bookable location."""

from pydantic import BaseModel, ConfigDict, model_validator


class VenueInfo(BaseModel):
    """A bookable venue or vendor as described by the model.

    Venues carry ``name``; caterers carry ``company``. Exactly one of
    ``website``/``phone`` is expected but not enforced. ``price`` is display
    text (e.g. "$5,000 - $8,000"), not a number.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = None
    company: str | None = None
    address: str
    price: str
    website: str | None = None
    phone: str | None = None

    @model_validator(mode="after")
    def validate_has_title(self) -> "VenueInfo":
        """Ensure the venue is named."""
        if not (self.name or self.company):
            raise ValueError("venue must have a name or company")
        return self

    @property
    def title(self) -> str:
        """Display name (venue name or company)."""
        return self.name or self.company or ""

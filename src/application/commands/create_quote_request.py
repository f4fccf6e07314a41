"""
Quote Request Commands - CQRS Write Commands

Commands that create a quote request or change its contractor selection,
winner or lifecycle state.

Responsibility:
    - Data holders for request-level write operations
    - Input shape validation (types, ranges, blank strings, duplicate ids)
    - Conversion of property/consumption blobs into the opaque details map

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Used by QuoteEngineService, built by the API Layer from JSON bodies
    - Immutable data structures (Command pattern)
    - Business rules that depend on stored state (size bounds from pricing
      rules, contractor cap, ownership) are checked by the Domain Layer
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from src.domain.quoting.value_objects.money import coerce_decimal


class CreateQuoteRequestCommand(BaseModel):
    """
    Command creating a quote request for the calling user.

    Attributes:
        system_size_kwp: Requested system capacity (> 0)
        location: Installation address / locality
        service_area: Optional service area used for contractor matching
        contractor_ids: Contractors invited up front (0..cap, no duplicates)
        property_details: Opaque property data (roof type, area, ...)
        electricity_consumption: Opaque consumption data
        inspection_schedule: Opaque preferred inspection slots

    Examples:
        >>> command = CreateQuoteRequestCommand(
        ...     system_size_kwp=10,
        ...     location="Riyadh",
        ...     contractor_ids=["c-1", "c-2"],
        ... )
        >>> command.details()
        {}
    """

    system_size_kwp: Decimal = Field(..., gt=0, description="Requested capacity in kWp")
    location: str = Field(..., min_length=1, description="Installation location")
    service_area: Optional[str] = Field(default=None, description="Service area")
    contractor_ids: list[str] = Field(default_factory=list, description="Invited contractors")
    property_details: Optional[dict[str, Any]] = None
    electricity_consumption: Optional[dict[str, Any]] = None
    inspection_schedule: Optional[dict[str, Any]] = None

    model_config = {"frozen": True}

    @field_validator("system_size_kwp", mode="before")
    @classmethod
    def coerce_size(cls, value):
        return coerce_decimal(value)

    @field_validator("location")
    @classmethod
    def validate_location(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("location must not be blank")
        return value.strip()

    @field_validator("contractor_ids")
    @classmethod
    def validate_contractor_ids(cls, value: list[str]) -> list[str]:
        """
        Reject blank and repeated contractor ids.

        Raises:
            ValueError: If an id is blank or appears twice
        """
        cleaned = [contractor_id.strip() for contractor_id in value]
        if any(not contractor_id for contractor_id in cleaned):
            raise ValueError("contractor ids must not be blank")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("contractor ids must not contain duplicates")
        return cleaned

    def details(self) -> dict[str, Any]:
        """Opaque pass-through data stored on the request."""
        blobs = {
            "property_details": self.property_details,
            "electricity_consumption": self.electricity_consumption,
            "inspection_schedule": self.inspection_schedule,
        }
        return {key: value for key, value in blobs.items() if value is not None}


class AddContractorCommand(BaseModel):
    """Invite one more contractor onto an existing request."""

    contractor_id: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class CancelQuoteRequestCommand(BaseModel):
    """Cancel a request; the reason is kept on the record."""

    reason: Optional[str] = Field(default=None, max_length=1000)

    model_config = {"frozen": True}


class SelectQuoteCommand(BaseModel):
    """Pick an approved quote as the winner of a request."""

    quote_id: str = Field(..., min_length=1)

    model_config = {"frozen": True}

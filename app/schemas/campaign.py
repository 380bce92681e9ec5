import math
import re
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_serializer, model_validator
from pydantic.alias_generators import to_camel

from app.core.exceptions import ValidationError

REQUIRED_FIELDS = ("name", "budget", "startDate", "endDate", "status")

# Plain decimal notation only: no hex, no digit separators, no "Infinity"
NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False

def parse_budget(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str) and NUMBER_PATTERN.match(value.strip()):
            number = float(value.strip())
        else:
            return None
    except OverflowError:
        return None
    return number if math.isfinite(number) else None

def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date or date-time; naive values are taken as UTC."""
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)

def format_timestamp(value: datetime) -> str:
    """Render as UTC with millisecond precision, e.g. 2024-03-01T00:00:00.000Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"

class CampaignBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    budget: float
    start_date: datetime
    end_date: datetime
    status: str

class CampaignCreate(CampaignBase):
    """A validated campaign candidate, ready to be persisted."""

    @classmethod
    def from_payload(cls, payload: Any, statuses: Optional[Sequence[str]] = None) -> "CampaignCreate":
        return cls.model_validate(payload, context={"statuses": statuses})

    @model_validator(mode="before")
    @classmethod
    def parse_payload(cls, payload: Any, info: ValidationInfo) -> dict:
        """
        Normalise a loosely typed request body.

        Checks run in a fixed order and the first failure raises
        ValidationError. When a ``statuses`` context is given the status must
        match one of them case-insensitively and is stored lower-cased;
        otherwise any non-empty status is kept as supplied.
        """
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object.")

        if any(is_blank(payload.get(field)) for field in REQUIRED_FIELDS):
            raise ValidationError("All fields are required.")

        budget = parse_budget(payload["budget"])
        if budget is None:
            raise ValidationError("Budget must be a number.")
        if budget < 0:
            raise ValidationError("Budget must not be negative.")

        start_date = parse_timestamp(payload["startDate"])
        end_date = parse_timestamp(payload["endDate"])
        if start_date is None or end_date is None:
            raise ValidationError("Start date and end date must be valid dates.")

        name, status = payload["name"], payload["status"]
        if not isinstance(name, str) or not isinstance(status, str):
            raise ValidationError("Name and status must be text.")
        status = status.strip()
        statuses = (info.context or {}).get("statuses")
        if statuses:
            allowed = [label.lower() for label in statuses]
            if status.lower() not in allowed:
                raise ValidationError(f"Status must be one of: {', '.join(allowed)}.")
            status = status.lower()

        return {
            "name": name.strip(),
            "budget": budget,
            "start_date": start_date,
            "end_date": end_date,
            "status": status,
        }

class CampaignRead(CampaignBase):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int

    @field_serializer("start_date", "end_date")
    def serialize_dates(self, value: datetime) -> str:
        return format_timestamp(value)

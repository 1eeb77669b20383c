"""Pydantic request models for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EventPayload(BaseModel):
    """
    Create/update body.

    Everything is optional at this layer; required-field and consistency
    checks happen in core.validation so they map to VALIDATION_ERROR.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = None
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_recurring: bool | None = False
    frequency: str | None = None
    days_of_week: list[int] | None = None
    recurring_end_date: datetime | None = None
    category: str | None = None

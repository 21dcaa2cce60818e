"""Common schema types."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RaceStatusEnum(str, Enum):
    """Where a race is relative to now."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    FINISHED = "finished"


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Fields are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

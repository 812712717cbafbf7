from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def datetime_to_utc_str(dt: datetime) -> str:
    """Convert datetime to an ISO-8601 UTC string"""
    if not dt.tzinfo:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


class CustomModel(BaseModel):
    """Custom base model with global configurations"""
    model_config = ConfigDict(
        json_encoders={datetime: datetime_to_utc_str},
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Import all SQLAlchemy models to ensure they are registered with Base.metadata
from herero_dictionary.words.models import WordEntry, Definition  # noqa: E402,F401

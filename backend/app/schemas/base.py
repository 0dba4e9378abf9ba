from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes as camelCase and accepts either camelCase or snake_case input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def clean_optional(value: str | None) -> str | None:
    """Trim a free-text field; blank input is stored as null."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def clean_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value

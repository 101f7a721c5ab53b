from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys; Python code uses snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def read_string(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def read_optional_string(value):
    text = read_string(value)
    return text or None

"""Pydantic models for snapshots fed into the engine and values derived from them."""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def _none_as_zero(value: object) -> object:
    return 0.0 if value is None else value


# Numeric snapshot field; an explicit null from the dashboard counts as 0.
Amount = Annotated[float, BeforeValidator(_none_as_zero)]


class CamelModel(BaseModel):
    """Accepts the dashboard's camelCase keys and serializes back to them."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

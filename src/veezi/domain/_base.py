"""Shared base for all Veezi domain records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal


class VeeziRecord(BaseModel):
    """Immutable value object decoded from a Veezi JSON payload.

    Upstream keys are PascalCase (``FilmId``, ``PreShowStartTime``); fields
    are declared in snake_case and may be populated by either name.  Keys
    the model does not declare are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_pascal,
        populate_by_name=True,
    )


def unwrap_ids(value: Any) -> Any:
    """Turn ``[{"Id": 1}, {"Id": 2}]`` into ``[1, 2]``.

    Values that are not a list of objects are returned unchanged so that
    field validation reports the real problem.
    """
    if isinstance(value, list):
        return [item["Id"] if isinstance(item, dict) and "Id" in item else item for item in value]
    return value

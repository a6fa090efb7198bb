"""Base model shared by every parkval document model.

Every model inherits from :class:`ParkvalBaseModel` which provides:

* ``alias_generator=to_camel`` so the store's camelCase keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used instead (the store returns ``null`` for unset
  fields written by older sheet versions).
* ``to_payload()`` producing the camelCase dict written back to the store.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


def coerce_text(value: Any) -> Any:
    """Render scalar cell values (numbers, bools) as text.

    Spreadsheet exports and hand-edited store nodes sometimes carry
    plates such as ``1234`` as numbers.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


Text = Annotated[str, BeforeValidator(coerce_text)]
"""Annotated ``str`` that accepts numeric cell values."""


class ParkvalBaseModel(BaseModel):
    """Base for store document models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}

    def to_payload(self) -> dict[str, Any]:
        """Serialize with camelCase keys.

        Only fields that were supplied (by the caller or the store) are
        written, so a round trip never adds keys the source did not have.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude_unset=True)

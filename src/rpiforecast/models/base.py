"""Data model base classes and validators for rpiforecast.

OpenWeather payloads are treated as best-effort structures: a block that is
missing, null or of the wrong type should not sink the whole batch. The
LenientModel base implements that once for every field of every subclass.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)


class LenientModel(BaseModel):
    """Base model whose fields fall back to their defaults on bad input.

    Subclasses declare every field with a zero default (0, 0.0, "", an empty
    list or a default-constructed block). Absent keys use that default
    directly; present keys that fail validation are replaced by it.
    Unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="wrap")
    @classmethod
    def _zero_on_error(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)

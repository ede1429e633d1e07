"""Serializable result models for the Numerus CLI.

Numeric values cross the JSON boundary as decimal strings so that no
precision is lost to a JSON float:

- OperationResult: One backend operation and its result
- BackendInfo: Whether a backend constructs on this runtime
- ErrorResult: A typed failure
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from numerus.backends.protocol import BackendKind
from numerus.codec import plain_string, to_decimal_string
from numerus.numerus import Numerus


def _as_decimal_string(v: object) -> str:
    if isinstance(v, Numerus):
        return v.to_string()
    if isinstance(v, Decimal):
        return plain_string(v)
    if isinstance(v, bool):
        raise ValueError("bool is not a numeric value")
    if isinstance(v, int | float | str):
        return to_decimal_string(v)
    raise ValueError(f"Cannot convert {type(v).__name__} to a decimal string")


class OperationResult(BaseModel):
    """Outcome of one backend operation."""

    operation: str = Field(..., description="Backend operation name")
    backend: BackendKind = Field(..., description="Backend that ran the operation")
    scale: int | None = Field(default=None, ge=0, description="Backend scale (None for native)")
    operands: list[str] = Field(default_factory=list, description="Canonical operands")
    result: str = Field(..., description="Result as a decimal string")
    native_type: Literal["int", "float", "str"] = Field(
        ..., description="Python type the backend returned"
    )

    @field_validator("operands", mode="before")
    @classmethod
    def coerce_operands(cls, v: object) -> list[str]:
        """Coerce operands to canonical decimal strings."""
        if not isinstance(v, list | tuple):
            raise ValueError(f"operands must be a sequence, got {type(v).__name__}")
        return [_as_decimal_string(item) for item in v]

    @field_validator("result", mode="before")
    @classmethod
    def coerce_result(cls, v: object) -> str:
        """Coerce the result to a decimal string."""
        return _as_decimal_string(v)

    model_config = {"frozen": True, "extra": "forbid"}


class BackendInfo(BaseModel):
    """Availability of one backend at a given scale."""

    kind: BackendKind = Field(..., description="Backend identity")
    available: bool = Field(..., description="Whether the backend constructs")
    scale: int | None = Field(default=None, ge=0, description="Requested scale (None for native)")
    reason: str | None = Field(default=None, description="Why the backend is unavailable")

    @model_validator(mode="after")
    def validate_reason(self) -> BackendInfo:
        """An unavailable backend must say why; an available one must not."""
        if self.available and self.reason is not None:
            raise ValueError("available backend cannot carry a reason")
        if not self.available and not self.reason:
            raise ValueError("unavailable backend must carry a reason")
        return self

    model_config = {"frozen": True, "extra": "forbid"}


class ErrorResult(BaseModel):
    """A typed failure reported by the CLI."""

    code: str = Field(..., description="Stable error code")
    message: str = Field(..., description="Human-readable message")
    operation: str | None = Field(default=None, description="Operation that failed")

    model_config = {"frozen": True, "extra": "forbid"}

"""Immutable settings for one directive instance."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ValidateDirectiveConfig(BaseModel):
    """Settings shared by the compiler, interceptor and SDL generator.

    ``allow_unknown`` and ``convert`` are the baseline options every wrapped
    resolver validates its arguments with; annotations can still enable
    conversion for individual values through ``prefs`` or a type cast.
    """

    model_config = ConfigDict(frozen=True)

    directive_name: str = Field(
        default="validate",
        pattern=r"^[_A-Za-z][_0-9A-Za-z]*$",
        description="Name the directive is declared and looked up under",
    )
    allow_unknown: bool = True
    convert: bool = False
    error_code: str = Field(
        default="BAD_USER_INPUT",
        description="Value of extensions.code on rejected calls",
    )

"""Pydantic models for number payloads.

`num` must be a JSON integer: booleans, floats and numeric strings are
rejected. The range is the signed 64-bit range of the `nums.num` column.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class NumberIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    num: StrictInt = Field(ge=INT64_MIN, le=INT64_MAX)


class NumberOut(BaseModel):
    num: int


__all__ = ["NumberIn", "NumberOut", "INT64_MIN", "INT64_MAX"]

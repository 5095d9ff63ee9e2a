"""Pydantic request/response models for the Person Service API."""

from pydantic import BaseModel, ConfigDict, Field

U32_MAX = 2**32 - 1
I32_MIN = -(2**31)
I32_MAX = 2**31 - 1


class Person(BaseModel):
    """Person record as stored and exchanged over the wire.

    Strict: JSON values of the wrong type (a string id, a boolean age) are
    rejected rather than converted.
    """

    model_config = ConfigDict(strict=True)

    id: int = Field(..., ge=0, le=U32_MAX, description="Unique person identifier")
    name: str = Field(..., description="Person name")
    age: int = Field(..., ge=I32_MIN, le=I32_MAX, description="Person age")
    date: str = Field(..., description="Date/time text, stored verbatim")

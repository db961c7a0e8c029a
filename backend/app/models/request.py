# backend/app/models/request.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, ClassVar, Dict


class SchoolIn(BaseModel):
    """
    Raw body of POST /addSchool.

    Fields are untyped: numbers may arrive as numbers or as
    numeric text, and anything malformed is reported by the school
    validator with a specific error kind rather than a generic 422.
    """
    model_config = ConfigDict(extra="ignore")

    EXAMPLE: ClassVar[Dict[str, Any]] = {
        "name": "Oak School",
        "address": "1 Main St",
        "latitude": "40.7128",
        "longitude": -74.006,
    }

    name: Any = Field(default=None, description="School name, 3 to 255 characters after trimming.")
    address: Any = Field(default=None, description="Street address, 5 to 500 characters after trimming.")
    latitude: Any = Field(default=None, description="Decimal degrees in [-90, 90], number or numeric text.")
    longitude: Any = Field(default=None, description="Decimal degrees in [-180, 180], number or numeric text.")

    @classmethod
    def from_raw(cls, raw: Any) -> "SchoolIn":
        """Any decoded JSON body → SchoolIn; a missing body or a non-object has no fields."""
        return cls.model_validate(raw if isinstance(raw, dict) else {})

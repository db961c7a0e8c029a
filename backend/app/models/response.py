from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

from .domain import RankedSchool, School


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SchoolCreated(_Wire):
    school_id: int = Field(alias="schoolId")
    name: str
    address: str
    latitude: float
    longitude: float


class AddSchoolResponse(_Wire):
    status: Literal["success"] = "success"
    message: str = "School added successfully"
    data: SchoolCreated


class SchoolHit(_Wire):
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    distance: float

    @classmethod
    def from_ranked(cls, ranked: RankedSchool) -> "SchoolHit":
        s: School = ranked.school
        return cls(
            id=s.id,
            name=s.name,
            address=s.address,
            latitude=s.latitude,
            longitude=s.longitude,
            distance=ranked.distance,
        )


class UserLocation(_Wire):
    latitude: float
    longitude: float


class ListSchoolsResponse(_Wire):
    status: Literal["success"] = "success"
    message: str = "Schools fetched and sorted by proximity successfully"
    user_location: UserLocation = Field(alias="userLocation")
    total_schools: int = Field(alias="totalSchools")
    schools: list[SchoolHit]


class ErrorResponse(_Wire):
    status: Literal["error"] = "error"
    message: str
    error: str
    kind: str | None = None

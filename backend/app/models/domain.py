# backend/app/models/domain.py
"""Plain value types passed between the validator, the store and the ranking code."""
from __future__ import annotations
from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True)
class NewSchool:
    """A validated submission, trimmed and ready to insert."""
    name: str
    address: str
    lat: float
    lon: float


@dataclass(frozen=True)
class School:
    id: int
    name: str
    address: str
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RankedSchool:
    school: School
    distance: float  # km, rounded to 2 decimals

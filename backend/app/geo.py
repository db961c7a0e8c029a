# backend/app/geo.py
"""Great-circle distance and proximity ranking over stored schools."""
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence
import math

from .models.domain import Coordinates, RankedSchool, School

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in kilometres between two points given in decimal degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)

    a = math.sin(d_lat / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def rank_by_distance(reference: Coordinates, records: Iterable[School]) -> List[RankedSchool]:
    """
    Order schools by distance from `reference`, closest first.

    The sort runs on the exact distance and is stable, so equal distances
    keep their input order. Rounding to 2 decimals happens afterwards.
    """
    measured = [
        (haversine_km(reference.lat, reference.lon, s.latitude, s.longitude), s)
        for s in records
    ]
    measured.sort(key=lambda pair: pair[0])
    return [RankedSchool(school=s, distance=round(d, 2)) for d, s in measured]


def within(
    ranked: Sequence[RankedSchool],
    radius_km: Optional[float] = None,
    limit: Optional[int] = None,
) -> List[RankedSchool]:
    """Optional post-filter for callers: keep entries inside a radius, then cap the count."""
    out = list(ranked)
    if radius_km is not None:
        out = [r for r in out if r.distance <= radius_km]
    if limit is not None:
        out = out[:limit]
    return out

# backend/app/validation.py
from __future__ import annotations
from typing import Any, Mapping, Protocol
import logging
import math

from .errors import ErrorKind, ValidationFailure
from .models.domain import Coordinates, NewSchool

log = logging.getLogger(__name__)

MIN_NAME_LEN = 3
MIN_ADDRESS_LEN = 5
MAX_NAME_LEN = 255  # schools.name VARCHAR(255)
MAX_ADDRESS_LEN = 500  # schools.address VARCHAR(500)

MSG_NAME = "Name is required and must be at least 3 characters long"
MSG_ADDRESS = "Address is required and must be at least 5 characters long"
MSG_NAME_TOO_LONG = "Name must be at most 255 characters long"
MSG_ADDRESS_TOO_LONG = "Address must be at most 500 characters long"
MSG_COORDS_MISSING = "Latitude and longitude are required and must not be empty"
MSG_LAT = "Latitude must be a valid number between -90 and 90"
MSG_LON = "Longitude must be a valid number between -180 and 180"
MSG_DUPLICATE = "School with the same name and address already exists"
MSG_STORE = "Error checking for duplicates"
MSG_RADIUS = "Radius must be a positive number of kilometres"
MSG_LIMIT = "Limit must be a positive whole number"


class DuplicateLookup(Protocol):
    """The only store capability school validation needs."""

    def exists_by_name_address(self, name: str, address: str) -> bool: ...


# ------------ Coordinates ------------

def _is_missing(val: Any) -> bool:
    return val is None or (isinstance(val, str) and not val.strip())


def _parse_number(val: Any) -> float:
    """Numeric or numeric-text input → float; NaN when it isn't a number."""
    # bool is an int subclass, but JSON true/false is not a coordinate
    if isinstance(val, bool):
        return math.nan
    if isinstance(val, float):
        return val
    if isinstance(val, int):
        try:
            return float(val)
        except OverflowError:
            return math.inf if val > 0 else -math.inf
    if isinstance(val, str):
        text = val.strip()
        # float() accepts digit-group underscores ("4_5" == 45.0); coordinates don't
        if "_" in text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _check_axis(value: float, limit: float, message: str) -> None:
    if math.isnan(value):
        raise ValidationFailure(ErrorKind.NOT_A_NUMBER, message)
    if not math.isfinite(value) or not -limit <= value <= limit:
        raise ValidationFailure(ErrorKind.OUT_OF_RANGE, message)


def validate_coordinates(latitude_raw: Any, longitude_raw: Any) -> Coordinates:
    """
    Check a raw latitude/longitude pair and return it as floats.

    Raises ValidationFailure with MissingField, NotANumber or OutOfRange.
    Latitude is checked before longitude.
    """
    if _is_missing(latitude_raw) or _is_missing(longitude_raw):
        raise ValidationFailure(ErrorKind.MISSING_FIELD, MSG_COORDS_MISSING)

    lat = _parse_number(latitude_raw)
    lon = _parse_number(longitude_raw)
    _check_axis(lat, 90.0, MSG_LAT)
    _check_axis(lon, 180.0, MSG_LON)
    return Coordinates(lat=lat, lon=lon)


# ------------ School records ------------

def _trimmed_text(val: Any, min_len: int) -> str | None:
    if not isinstance(val, str):
        return None
    text = val.strip()
    return text if len(text) >= min_len else None


def _check_text(val: Any, min_len: int, max_len: int, kind: ErrorKind, msg: str, msg_long: str) -> str:
    text = _trimmed_text(val, min_len)
    if text is None:
        raise ValidationFailure(kind, msg)
    if len(text) > max_len:
        raise ValidationFailure(kind, msg_long)
    return text


def validate_school(record: Mapping[str, Any], lookup: DuplicateLookup) -> NewSchool:
    """
    Validate a submitted school and make sure it isn't already stored.

    Checks run in a fixed order (name, address, coordinates, duplicate)
    and the first failure is raised. Any error from `lookup` surfaces as
    StoreUnavailable so callers can tell bad input from a dead database.
    """
    name = _check_text(record.get("name"), MIN_NAME_LEN, MAX_NAME_LEN,
                       ErrorKind.INVALID_NAME, MSG_NAME, MSG_NAME_TOO_LONG)
    address = _check_text(record.get("address"), MIN_ADDRESS_LEN, MAX_ADDRESS_LEN,
                          ErrorKind.INVALID_ADDRESS, MSG_ADDRESS, MSG_ADDRESS_TOO_LONG)

    coords = validate_coordinates(record.get("latitude"), record.get("longitude"))

    try:
        exists = lookup.exists_by_name_address(name, address)
    except Exception as e:
        log.exception("Duplicate check failed for name=%r address=%r", name, address)
        raise ValidationFailure(ErrorKind.STORE_UNAVAILABLE, MSG_STORE) from e

    if exists:
        raise ValidationFailure(ErrorKind.DUPLICATE_RECORD, MSG_DUPLICATE)

    return NewSchool(name=name, address=address, lat=coords.lat, lon=coords.lon)


# ------------ List filters ------------

def validate_filters(radius_raw: Any, limit_raw: Any) -> tuple[float | None, int | None]:
    """
    Optional `radius` (km, > 0) and `limit` (>= 1) for listing.

    Absent or empty values mean no filter. Unparseable values are
    NotANumber; zero, negative or non-finite ones are OutOfRange.
    """
    radius = None
    if not _is_missing(radius_raw):
        radius = _parse_number(radius_raw)
        if math.isnan(radius):
            raise ValidationFailure(ErrorKind.NOT_A_NUMBER, MSG_RADIUS)
        if not math.isfinite(radius) or radius <= 0:
            raise ValidationFailure(ErrorKind.OUT_OF_RANGE, MSG_RADIUS)

    limit = None
    if not _is_missing(limit_raw):
        text = str(limit_raw).strip()
        if isinstance(limit_raw, bool) or "_" in text:
            raise ValidationFailure(ErrorKind.NOT_A_NUMBER, MSG_LIMIT)
        try:
            limit = int(text)
        except ValueError:
            raise ValidationFailure(ErrorKind.NOT_A_NUMBER, MSG_LIMIT) from None
        if limit < 1:
            raise ValidationFailure(ErrorKind.OUT_OF_RANGE, MSG_LIMIT)

    return radius, limit

# backend/app/errors.py
from __future__ import annotations
from enum import Enum
from typing import Dict


class ErrorKind(str, Enum):
    MISSING_FIELD = "MissingField"
    NOT_A_NUMBER = "NotANumber"
    OUT_OF_RANGE = "OutOfRange"
    INVALID_NAME = "InvalidName"
    INVALID_ADDRESS = "InvalidAddress"
    DUPLICATE_RECORD = "DuplicateRecord"
    STORE_UNAVAILABLE = "StoreUnavailable"


class ValidationFailure(Exception):
    """
    Structured, recoverable rejection of school or coordinate input.

    Raised on the first failing check; `kind` lets callers tell bad input
    apart from an unavailable store.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.message, "kind": self.kind.value}

    def __repr__(self) -> str:
        return f"ValidationFailure({self.kind.value}, {self.message!r})"


class StoreError(Exception):
    """The schools table could not be read or written."""

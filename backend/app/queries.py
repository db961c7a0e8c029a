from __future__ import annotations
from typing import List
import logging

import mariadb

from .db import get_conn
from .errors import ErrorKind, StoreError, ValidationFailure
from .models.domain import School
from .utils.metrics import time_block
from .validation import MSG_DUPLICATE

log = logging.getLogger(__name__)

ER_DUP_ENTRY = 1062


class SchoolStore:
    """
    MariaDB-backed access to the `schools` table.

    Every driver error is re-raised as StoreError, except a unique-key
    violation on insert, which means a concurrent request stored the same
    name/address first.
    """

    def exists_by_name_address(self, name: str, address: str) -> bool:
        sql = "SELECT id FROM schools WHERE name = ? AND address = ? LIMIT 1"
        try:
            with get_conn() as conn, conn.cursor() as cur, time_block("db.schools.exists"):
                cur.execute(sql, (name, address))
                row = cur.fetchone()
        except mariadb.Error as e:
            raise StoreError(f"duplicate lookup failed: {e}") from e
        return row is not None

    def insert(self, name: str, address: str, lat: float, lon: float) -> int:
        sql = "INSERT INTO schools (name, address, latitude, longitude) VALUES (?, ?, ?, ?)"
        try:
            with get_conn() as conn, conn.cursor() as cur, time_block("db.schools.insert"):
                cur.execute(sql, (name, address, lat, lon))
                new_id = cur.lastrowid
        except mariadb.IntegrityError as e:
            if getattr(e, "errno", None) == ER_DUP_ENTRY:
                log.info("Unique key rejected duplicate school name=%r address=%r", name, address)
                raise ValidationFailure(ErrorKind.DUPLICATE_RECORD, MSG_DUPLICATE) from e
            raise StoreError(f"insert failed: {e}") from e
        except mariadb.Error as e:
            raise StoreError(f"insert failed: {e}") from e
        return int(new_id)

    def fetch_all(self) -> List[School]:
        sql = "SELECT id, name, address, latitude, longitude FROM schools"
        try:
            with get_conn() as conn, conn.cursor() as cur, time_block("db.schools.fetch_all"):
                cur.execute(sql)
                rows = cur.fetchall()
        except mariadb.Error as e:
            raise StoreError(f"fetch failed: {e}") from e

        return [
            School(
                id=int(r[0]),
                name=r[1],
                address=r[2],
                latitude=float(r[3]),
                longitude=float(r[4]),
            )
            for r in rows
        ]

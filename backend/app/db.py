from __future__ import annotations
import logging
import mariadb
from contextlib import contextmanager

from .config import settings

log = logging.getLogger(__name__)

# Keep a single pool across the app
_pool = None
_cfg = None

SCHOOLS_DDL = """
CREATE TABLE IF NOT EXISTS schools (
  id INT AUTO_INCREMENT PRIMARY KEY,
  name VARCHAR(255) NOT NULL,
  address VARCHAR(500) NOT NULL,
  latitude DOUBLE NOT NULL,
  longitude DOUBLE NOT NULL,
  UNIQUE KEY uq_school_name_address (name, address)
)
"""


def _cfg_from_settings() -> dict:
    return {
        "host": settings.DATABASE_HOST,
        "port": settings.DATABASE_PORT,
        "user": settings.DATABASE_USER,
        "password": settings.DATABASE_PASSWORD,
        "database": settings.DATABASE_NAME,
        "connect_timeout": settings.DB_CONNECT_TIMEOUT,
        "autocommit": True,
    }


def init_pool():
    """Initialize a small connection pool using current settings."""
    global _pool, _cfg
    if _pool is not None:
        return
    _cfg = _cfg_from_settings()

    # Allow disabling pool for debugging if needed
    if settings.DB_USE_POOL:
        _pool = mariadb.ConnectionPool(
            pool_name="school_locator",
            pool_size=settings.DB_POOL_SIZE,
            **_cfg,
        )
        log.info("MariaDB pool ready: %s:%s/%s (size=%d)",
                 _cfg["host"], _cfg["port"], _cfg["database"], settings.DB_POOL_SIZE)
    else:
        _pool = None  # fall back to direct connections


def raw_connection():
    """Return a raw connection (from pool if available, else direct)."""
    if _pool is None:
        # lazy-init if not yet initialized
        init_pool()

    if _pool is not None:
        return _pool.get_connection()
    # no pool path
    return mariadb.connect(**_cfg_from_settings())


@contextmanager
def get_conn():
    """Context manager that yields a connection and always closes it."""
    conn = raw_connection()
    try:
        yield conn
    finally:
        try:
            conn.close()
        except mariadb.Error:
            log.warning("Failed to release DB connection", exc_info=True)


def init_schema() -> None:
    """Create the schools table if it does not exist yet."""
    with get_conn() as conn, conn.cursor() as cur:
        cur.execute(SCHOOLS_DDL)
    log.info("schools table ready")


def current_db_config_snapshot() -> dict:
    """Safe snapshot (no secrets) for health/debug endpoints."""
    c = _cfg or _cfg_from_settings()
    return {
        "host": c.get("host"),
        "port": c.get("port"),
        "database": c.get("database"),
        "user": c.get("user"),
        "pool": _pool is not None,
    }


def ping() -> bool:
    """
    Lightweight DB ping used by health endpoints.
    Returns True if a simple SELECT works, else False.
    """
    try:
        with get_conn() as conn, conn.cursor() as cur:
            cur.execute("SELECT 1")
            cur.fetchone()
        return True
    except mariadb.Error:
        log.warning("DB ping failed", exc_info=True)
        return False

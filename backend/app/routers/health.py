from fastapi import APIRouter
from ..db import current_db_config_snapshot, ping
from ..utils.metrics import snapshot

router = APIRouter()


@router.get("/healthz")
def healthz():
    # Liveness: say service is up without touching DB
    return {"service": "school-locator", "ok": True}


@router.get("/readyz")
def readyz():
    # Readiness: include DB check
    return {"service": "school-locator", "ok": ping(), "db": current_db_config_snapshot()}


@router.get("/metrics")
def metrics():
    return {"latency": snapshot()}

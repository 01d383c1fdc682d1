from fastapi import APIRouter
from fastapi.responses import JSONResponse

from shortlink.db.Connection import database

router = APIRouter(tags=["health"])

# simple liveness, never touches the store
@router.get("/health")
def health():
    return {"status": "UP"}

# readiness: check DB + Redis connectivity
@router.get("/ready")
def readiness():
    details = {"db": "ok" if database.verify_database_connection() else "error"}
    if database.redis_client is not None:
        details["redis"] = "ok" if database.verify_redis_connection() else "error"

    ready = all(v == "ok" for v in details.values())
    return JSONResponse(status_code=200 if ready else 503, content={"ready": ready, "details": details})

import time
from typing import Any, Dict

from fastapi import APIRouter

router = APIRouter()

# perf_counter is monotonic, so uptime never goes backwards
_STARTED_AT = time.perf_counter()


@router.get("/health")
def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "uptime": time.perf_counter() - _STARTED_AT,
        "time": int(time.time() * 1000),
    }

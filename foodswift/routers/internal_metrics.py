from __future__ import annotations

from fastapi import APIRouter, Depends

from foodswift.core.metrics import request_metrics
from foodswift.deps import AuthContext, require_auth

router = APIRouter(prefix="/internal/metrics", tags=["internal-metrics"])


@router.get("")
def metrics(_auth: AuthContext = Depends(require_auth)):
    return {"endpoints": request_metrics.snapshot()}

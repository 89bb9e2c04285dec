from __future__ import annotations

import logging
import traceback

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from family_tree.core.storage import get_store
from family_tree.services.diagnostics import collect_deployment_diagnostics
from family_tree.services.family_store import FamilyStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["debug"])


@router.get("/debug-deployment")
def debug_deployment(store: FamilyStore = Depends(get_store)):
    logs: list[str] = []
    try:
        return collect_deployment_diagnostics(store, logs)
    except Exception as exc:
        logger.exception("Deployment diagnostics failed")
        logs.append(f"CRITICAL ERROR: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": str(exc), "stack": traceback.format_exc(), "logs": logs},
        )

from __future__ import annotations

import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# 🩹 Degraded responses
# --------------------------------------------------------------------------- #

def degraded(body: Any, what: str) -> JSONResponse:
    """
    503 carrying a safe body (empty list or default object) so public pages
    can still render while the database is down.
    """
    logger.warning("Serving degraded %s: database unavailable", what)
    return JSONResponse(status_code=503, content=jsonable_encoder(body, by_alias=True))


def deleted(removed: bool) -> dict[str, bool]:
    return {"success": removed}

from __future__ import annotations

import json
import logging
import os
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import DEFAULT_SERVICE_CONFIG
from .service import recommend

logging.basicConfig(
    level=DEFAULT_SERVICE_CONFIG.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Map Recommend API", version="1.0.0")


async def _merged_params(request: Request) -> dict[str, Any]:
    """Query string merged with a JSON object body; body keys win."""
    params: dict[str, Any] = dict(request.query_params)

    raw = await request.body()
    if not raw:
        return params
    try:
        body = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring non-JSON request body")
        return params
    if isinstance(body, dict):
        params.update(body)
    return params


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.api_route("/map-recommend", methods=["GET", "POST"])
async def map_recommend(request: Request) -> JSONResponse:
    params = await _merged_params(request)
    envelope = await recommend(params, DEFAULT_SERVICE_CONFIG)
    return JSONResponse(status_code=envelope.code, content=envelope.to_wire())


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))

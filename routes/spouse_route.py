"""FastAPI routes for spouse submissions."""

import json
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from controllers.spouse_controller import SpouseController

router = APIRouter(prefix="/api/spouses", tags=["spouses"])


def _get_controller(request: Request) -> SpouseController:
    """Retrieve the shared spouse controller from the app state."""
    controller = getattr(request.app.state, "spouse_controller", None)
    if controller is None:
        raise HTTPException(status_code=500, detail="Spouse store not initialized.")
    return controller


async def _read_json_body(request: Request) -> Any:
    """Read and decode the request body, enforcing the configured size cap."""
    limit = request.app.state.settings.max_body_bytes

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise HTTPException(status_code=413, detail="Request entity too large")

    raw = await request.body()
    if len(raw) > limit:
        raise HTTPException(status_code=413, detail="Request entity too large")
    if not raw.strip():
        return {}

    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise HTTPException(status_code=400, detail="Invalid JSON body") from exc


@router.get("", summary="List all submitted spouses")
async def list_spouses(request: Request):
    """Return every stored spouse record."""
    status, body = await _get_controller(request).list_spouses()
    return JSONResponse(status_code=status, content=body)


@router.post("", summary="Submit a spouse")
async def create_spouse(request: Request):
    """Validate the JSON body and store it as a new spouse record."""
    controller = _get_controller(request)
    body = await _read_json_body(request)
    status, payload = await controller.create_spouse(body)
    return JSONResponse(status_code=status, content=payload)

"""Account Routes — export the logged-in user's data as one JSON document."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shipyard.api.dependencies import Clock, get_clock, get_state_store, require_user
from shipyard.core.account_export import export_account
from shipyard.services.state_store import StateStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/account", tags=["account"])


@router.get("/export")
async def export_my_account(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    now = clock()
    state = await store.load(now)
    user = require_user(state, now)
    logger.info("Account exported", extra={"user_id": user.id})
    return JSONResponse(
        content=export_account(state, user, now),
        headers={
            "Content-Disposition": f'attachment; filename="shipyard-{user.id}.json"',
        },
    )

"""Listing Upload — encode uploaded files, then insert the listing.

Invariants:
    - Every file is encoded before AppState is touched: an EncodeError leaves the
      catalog exactly as it was
    - The blueprint file itself is not stored, only its name

Design Decisions:
    - UploadFile reads are the only await points; the core add_listing stays sync and pure
"""

import logging
from datetime import datetime

from fastapi import UploadFile

from shipyard.core.app_state import AppState
from shipyard.core.catalog import add_listing
from shipyard.core.records import Listing, ListingDraft, User
from shipyard.infrastructure.file_encoding import encode_file

logger = logging.getLogger(__name__)


async def _encode_upload(upload: UploadFile | None, max_bytes: int) -> str | None:
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    return encode_file(data, upload.filename, upload.content_type, max_bytes)


async def create_listing_from_upload(
    state: AppState,
    draft: ListingDraft,
    owner: User,
    now: datetime,
    max_bytes: int,
    image: UploadFile | None = None,
    blueprint_file: UploadFile | None = None,
    blueprint_image: UploadFile | None = None,
) -> Listing:
    draft.image = await _encode_upload(image, max_bytes) or draft.image
    draft.blueprint_image = await _encode_upload(blueprint_image, max_bytes)
    if blueprint_file is not None and blueprint_file.filename:
        draft.blueprint_file = blueprint_file.filename

    listing = add_listing(state, draft, owner, now)
    logger.info(
        f"Listing '{listing.name}' added",
        extra={"listing_id": listing.id, "user_id": owner.id},
    )
    return listing

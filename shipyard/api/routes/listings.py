"""Listing Routes — browse, filter, create and read listings and their files.

Invariants:
    - GET /listings is read-only: it loads state but never saves
    - POST /listings encodes every upload before the catalog changes; an EncodeError
      leaves the stored state untouched
    - Image endpoints decode the stored data URL (or redirect to a plain URL);
      a listing without one is a 404

Design Decisions:
    - Multipart form for creation: files and fields arrive in one request
    - Tag filter accepts repeated ?tags= values and/or space-separated tags
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import RedirectResponse, Response

from shipyard.api.dependencies import Clock, get_clock, get_state_store, require_user
from shipyard.config import Settings, get_settings
from shipyard.core.catalog import (
    add_custom_search_tag, get_listing, normalize_tags, tag_affordances,
)
from shipyard.core.domain_types import Category, PaymentMethod
from shipyard.core.errors import ResourceNotFoundError
from shipyard.core.filter_engine import FilterCriteria, filter_listings
from shipyard.core.records import ListingDraft
from shipyard.infrastructure.file_encoding import decode_data_url
from shipyard.schemas.listings import (
    CustomTagRequest, ListingPage, ListingResponse, TagResponse,
)
from shipyard.services.listing_upload import create_listing_from_upload
from shipyard.services.state_store import StateStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/listings", tags=["listings"])


@router.get("", response_model=ListingPage)
async def browse_listings(
    q: str = Query("", max_length=200),
    category: str = Query(""),
    price: str = Query("", max_length=40),
    tags: list[str] = Query([]),
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    state = await store.load(clock())
    criteria = FilterCriteria(
        search_term=q.strip(),
        category=category,
        price_range=price,
        active_tags=normalize_tags(tags),
    )
    listings = filter_listings(state.listings, criteria)
    return ListingPage(
        count=len(listings),
        listings=[
            ListingResponse.from_listing(lst, state.favorites, state.wishlist)
            for lst in listings
        ],
    )


@router.post(
    "", response_model=ListingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_listing(
    name: str = Form(..., min_length=1, max_length=120),
    price: int = Form(..., ge=0),
    category: Category = Form(...),
    description: str = Form("", max_length=5000),
    tags: str = Form("", max_length=500),
    payment_method: PaymentMethod = Form(PaymentMethod.IN_PERSON),
    image: UploadFile | None = File(None),
    blueprint_file: UploadFile | None = File(None),
    blueprint_image: UploadFile | None = File(None),
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    now = clock()
    state = await store.load(now)
    owner = require_user(state, now)
    draft = ListingDraft(
        name=name,
        price=price,
        category=category.value,
        description=description,
        tags=tags,
        payment_method=payment_method,
    )
    listing = await create_listing_from_upload(
        state, draft, owner, now, settings.max_upload_bytes,
        image=image,
        blueprint_file=blueprint_file,
        blueprint_image=blueprint_image,
    )
    await store.save(state)
    return ListingResponse.from_listing(listing, state.favorites, state.wishlist)


@router.get("/tags", response_model=list[TagResponse])
async def list_tags(
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    state = await store.load(clock())
    return [
        TagResponse.from_affordance(a)
        for a in tag_affordances(state.listings, state.custom_search_tags)
    ]


@router.post(
    "/tags", response_model=list[TagResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_search_tag(
    body: CustomTagRequest,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    state = await store.load(clock())
    if add_custom_search_tag(state, body.tag) is not None:
        await store.save(state)
    return [
        TagResponse.from_affordance(a)
        for a in tag_affordances(state.listings, state.custom_search_tags)
    ]


@router.get("/{listing_id}", response_model=ListingResponse)
async def read_listing(
    listing_id: str,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    state = await store.load(clock())
    listing = get_listing(state, listing_id)
    return ListingResponse.from_listing(listing, state.favorites, state.wishlist)


async def _file_response(
    store: StateStore, clock: Clock, listing_id: str, attribute: str,
) -> Response:
    state = await store.load(clock())
    listing = get_listing(state, listing_id)
    data_url = getattr(listing, attribute)
    if not data_url:
        raise ResourceNotFoundError("ListingFile", f"{listing_id}/{attribute}")
    if not data_url.startswith("data:"):
        # Migrated listings may point at an external image URL
        return RedirectResponse(data_url)
    content_type, data = decode_data_url(data_url)
    return Response(content=data, media_type=content_type)


@router.get("/{listing_id}/image")
async def read_listing_image(
    listing_id: str,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    return await _file_response(store, clock, listing_id, "image")


@router.get("/{listing_id}/blueprint-image")
async def read_blueprint_image(
    listing_id: str,
    store: StateStore = Depends(get_state_store),
    clock: Clock = Depends(get_clock),
):
    return await _file_response(store, clock, listing_id, "blueprint_image")

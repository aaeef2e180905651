import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from config import BASE_URL
from database import get_store
from errors import LinkNotFound
from schemas import LinkCreate, LinkCreated, LinkOut, LinkList, MessageOut
from store import LinkStore
from utils import create_link as allocate_and_create, validate_code

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/links")
redirect_router = APIRouter()


@router.post("", response_model=LinkCreated, status_code=status.HTTP_201_CREATED)
async def create_link(link: LinkCreate, store: LinkStore = Depends(get_store)):
    new_link = await allocate_and_create(store, link.url, link.custom_code)
    return LinkCreated(
        code=new_link.code,
        url=new_link.url,
        short_url=f"{BASE_URL}/{new_link.code}",
        clicks=new_link.clicks,
        created_at=new_link.created_at,
    )


@router.get("", response_model=LinkList)
async def list_links(store: LinkStore = Depends(get_store)):
    links = await store.list_all()
    logger.info("Listed %d links", len(links))
    return LinkList(links=[LinkOut.model_validate(link) for link in links])


@router.get("/{code}", response_model=LinkOut)
async def get_link(code: str, store: LinkStore = Depends(get_store)):
    return await store.get_by_code(code)


@router.delete("/{code}", response_model=MessageOut)
async def delete_link(code: str, store: LinkStore = Depends(get_store)):
    await store.delete_by_code(code)
    return {"ok": True, "detail": f"Link '{code}' deleted"}


@redirect_router.get("/{code}", name="redirect_link", include_in_schema=False)
async def redirect_link(code: str, store: LinkStore = Depends(get_store)):
    if not validate_code(code):
        raise LinkNotFound(code)
    link = await store.record_click_and_fetch(code)
    logger.info("Redirected link %s, new count: %d", code, link.clicks)
    return RedirectResponse(
        url=link.url,
        status_code=status.HTTP_302_FOUND,
        headers={"Cache-Control": "no-store"},
    )

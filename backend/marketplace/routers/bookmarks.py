from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from marketplace.auth.dependencies import get_current_user, get_optional_user
from marketplace.deps import get_bookmark_service
from marketplace.errors import bad_request
from marketplace.models.bookmark import BookmarkInput, BookmarkPage, BookmarkStatus
from marketplace.models.common import Created, Ok
from marketplace.services.bookmarks import BookmarkService
from marketplace.utils.pagination import MAX_PAGE, clamp_page

router = APIRouter(prefix="/bookmarks", tags=["Bookmarks"])


@router.post("", status_code=201, response_model=Created)
def create_bookmark(
    data: BookmarkInput,
    response: Response,
    user: str = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
):
    bookmark, created = bookmarks.add(user, data.product_id)
    if not created:
        response.status_code = 200
    return Created(id=bookmark.id)


@router.get("/status", response_model=BookmarkStatus, response_model_exclude_none=True)
def bookmark_status(
    product_id: Optional[str] = Query(None, alias="productId"),
    user: Optional[str] = Depends(get_optional_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
):
    if not product_id:
        raise bad_request("Missing productId")
    if user is None:
        return BookmarkStatus(bookmarked=False)
    bookmark = bookmarks.find(user, product_id)
    if bookmark is None:
        return BookmarkStatus(bookmarked=False)
    return BookmarkStatus(bookmarked=True, id=bookmark.id)


@router.get("", response_model=BookmarkPage)
def list_bookmarks(
    page: int = Query(1, le=MAX_PAGE),
    page_size: int = Query(20, alias="pageSize"),
    user: str = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
):
    page, page_size = clamp_page(page, page_size, 50)
    items, total = bookmarks.for_user(user, page, page_size)
    return BookmarkPage(items=items, page=page, page_size=page_size, total=total)


@router.delete("/{bookmark_id}", response_model=Ok)
def delete_bookmark(
    bookmark_id: str,
    user: str = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
):
    bookmarks.remove(bookmark_id, user)
    return Ok()

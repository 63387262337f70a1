"""
Bookmark and cart endpoints.

Both collections hold copies of catalogue books tagged with the
owning ``userId``. Entries are addressed by ``(userId, bookId)`` where
``bookId`` is the ``id`` field of the stored book. Nothing prevents a
client from adding the same book twice; deleting a key removes every
entry stored under it.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ..models import BookmarkCreate, CartItemCreate, CartQuantityUpdate, SuccessResponse
from ..storage import BookshopStore, get_store

router = APIRouter()


# ---------------------------------------------------------------------------
# Bookmarks

@router.get("/bookmarks/{user_id}", tags=["bookmarks"])
def list_bookmarks(user_id: int, store: BookshopStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return store.list_bookmarks(user_id)


@router.post("/bookmarks", response_model=SuccessResponse, tags=["bookmarks"])
def add_bookmark(req: BookmarkCreate, store: BookshopStore = Depends(get_store)) -> SuccessResponse:
    store.add_bookmark(req.user_id, req.book)
    return SuccessResponse()


@router.delete("/bookmarks/{user_id}/{book_id}", response_model=SuccessResponse, tags=["bookmarks"])
def remove_bookmark(user_id: int, book_id: str, store: BookshopStore = Depends(get_store)) -> SuccessResponse:
    store.remove_bookmark(user_id, book_id)
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Cart

@router.get("/cart/{user_id}", tags=["cart"])
def list_cart(user_id: int, store: BookshopStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return store.list_cart(user_id)


@router.post("/cart", response_model=SuccessResponse, tags=["cart"])
def add_to_cart(req: CartItemCreate, store: BookshopStore = Depends(get_store)) -> SuccessResponse:
    store.add_cart_item(req.user_id, req.book, req.quantity)
    return SuccessResponse()


@router.put("/cart/{user_id}/{book_id}", response_model=SuccessResponse, tags=["cart"])
def update_cart_quantity(
    user_id: int,
    book_id: str,
    req: CartQuantityUpdate,
    store: BookshopStore = Depends(get_store),
) -> SuccessResponse:
    # No bounds here; the client keeps quantities at 1 or more.
    store.set_cart_quantity(user_id, book_id, req.quantity)
    return SuccessResponse()


@router.delete("/cart/{user_id}/{book_id}", response_model=SuccessResponse, tags=["cart"])
def remove_from_cart(user_id: int, book_id: str, store: BookshopStore = Depends(get_store)) -> SuccessResponse:
    store.remove_cart_item(user_id, book_id)
    return SuccessResponse()

# literae/storage.py
"""
In-memory stores for users, profiles, bookmarks and carts.

Nothing here is persisted: every collection lives for the lifetime of
the process and is rebuilt from the seed data on restart. Handlers do
not touch module globals directly; they receive a ``BookshopStore``
through the ``get_store`` dependency so that tests (or a future
database-backed implementation) can swap it out.
"""

from typing import Any, Dict, Hashable, List, Optional

from .models import Profile, User


SEED_USERS: List[Dict[str, Any]] = [
    {"id": 1, "username": "alice", "password": "123"},
    {"id": 2, "username": "bob", "password": "123"},
]

SEED_PROFILES: List[Dict[str, Any]] = [
    {
        "userId": 1,
        "fullName": "Alice Johnson",
        "address": "123 Maple Street, New York",
        "phone": "+1 234 567 890",
        "email": "alice@example.com",
    },
    {
        "userId": 2,
        "fullName": "Bob Smith",
        "address": "456 Oak Avenue, Los Angeles",
        "phone": "+1 987 654 321",
        "email": "bob@example.com",
    },
]

# Key for books whose id is a JSON array or object; path ids never equal it.
UNADDRESSABLE = object()


def _book_key(book_id: Any) -> Hashable:
    try:
        hash(book_id)
    except TypeError:
        return UNADDRESSABLE
    return book_id


class UserBookStore:
    """Per-user collection of book entries keyed by ``(user_id, book_id)``.

    Each user keeps an insertion-ordered list of entries plus an index
    from book id to the entries stored under it, so updates by key do
    not scan the whole store. Several entries may share a key: adding
    the same book twice keeps both.
    """

    def __init__(self) -> None:
        self._entries: Dict[int, List[Dict[str, Any]]] = {}
        self._index: Dict[int, Dict[Hashable, List[Dict[str, Any]]]] = {}

    def add(self, user_id: int, book_id: Any, entry: Dict[str, Any]) -> Dict[str, Any]:
        self._entries.setdefault(user_id, []).append(entry)
        by_book = self._index.setdefault(user_id, {})
        by_book.setdefault(_book_key(book_id), []).append(entry)
        return entry

    def list_for_user(self, user_id: int) -> List[Dict[str, Any]]:
        return list(self._entries.get(user_id, []))

    def update(self, user_id: int, book_id: Hashable, **fields: Any) -> int:
        """Set ``fields`` on every matching entry; returns how many matched."""
        entries = self._index.get(user_id, {}).get(book_id, [])
        for entry in entries:
            entry.update(fields)
        return len(entries)

    def remove(self, user_id: int, book_id: Hashable) -> int:
        by_book = self._index.get(user_id)
        if not by_book or book_id not in by_book:
            return 0
        removed = {id(entry) for entry in by_book.pop(book_id)}
        remaining = [e for e in self._entries[user_id] if id(e) not in removed]
        if remaining:
            self._entries[user_id] = remaining
        else:
            del self._entries[user_id]
            del self._index[user_id]
        return len(removed)


class BookshopStore:
    def __init__(
        self,
        users: Optional[List[Dict[str, Any]]] = None,
        profiles: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        self.users: List[User] = [User(**u) for u in (SEED_USERS if users is None else users)]
        self.profiles: Dict[int, Profile] = {}
        for raw in SEED_PROFILES if profiles is None else profiles:
            profile = Profile(**raw)
            self.profiles[profile.user_id] = profile
        self.bookmarks = UserBookStore()
        self.carts = UserBookStore()

    def get_user_by_username(self, username: Optional[str]) -> Optional[User]:
        return next((u for u in self.users if u.username == username), None)

    def get_profile(self, user_id: int) -> Optional[Profile]:
        return self.profiles.get(user_id)

    def add_bookmark(self, user_id: int, book: Dict[str, Any]) -> Dict[str, Any]:
        # Request fields override same-named book fields so the entry stays under its owner.
        entry = {**book, "userId": user_id}
        return self.bookmarks.add(user_id, book.get("id"), entry)

    def list_bookmarks(self, user_id: int) -> List[Dict[str, Any]]:
        return self.bookmarks.list_for_user(user_id)

    def remove_bookmark(self, user_id: int, book_id: str) -> int:
        return self.bookmarks.remove(user_id, book_id)

    def add_cart_item(self, user_id: int, book: Dict[str, Any], quantity: Optional[int] = None) -> Dict[str, Any]:
        # Same precedence as bookmarks; a book's own "quantity" never wins.
        entry = {**book, "userId": user_id, "quantity": quantity or 1}
        return self.carts.add(user_id, book.get("id"), entry)

    def list_cart(self, user_id: int) -> List[Dict[str, Any]]:
        return self.carts.list_for_user(user_id)

    def set_cart_quantity(self, user_id: int, book_id: str, quantity: int) -> int:
        return self.carts.update(user_id, book_id, quantity=quantity)

    def remove_cart_item(self, user_id: int, book_id: str) -> int:
        return self.carts.remove(user_id, book_id)


_store = BookshopStore()


def get_store() -> BookshopStore:
    return _store


def reset_store() -> BookshopStore:
    """Replace the process-wide store with a freshly seeded one."""
    global _store
    _store = BookshopStore()
    return _store

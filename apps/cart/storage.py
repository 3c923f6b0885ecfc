"""Cart persistence slots.

The cart is stored as a list of plain dicts under a fixed key. In the API
the slot is the visitor's Django session, so the cart survives reloads in
the same browser; concurrent tabs share it with last-write-wins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from copy import deepcopy

from django.conf import settings  # type: ignore


class CartStorage(ABC):
    @abstractmethod
    def read(self) -> list[dict]:
        """Return the stored line items (empty list when nothing is stored)."""

    @abstractmethod
    def write(self, items: list[dict]) -> None:
        """Replace the stored line items."""


class InMemoryCartStorage(CartStorage):
    def __init__(self, items: list[dict] | None = None) -> None:
        self.data: list[dict] = deepcopy(items) if items else []
        self.writes = 0

    def read(self) -> list[dict]:
        return deepcopy(self.data)

    def write(self, items: list[dict]) -> None:
        self.data = deepcopy(items)
        self.writes += 1


class SessionCartStorage(CartStorage):
    """Stores the cart in a Django session under CART_SESSION_KEY."""

    def __init__(self, session, key: str | None = None) -> None:
        self.session = session
        self.key = key or getattr(settings, "CART_SESSION_KEY", "cart-storage")

    def read(self) -> list[dict]:
        stored = self.session.get(self.key) or {}
        items = stored.get("items") if isinstance(stored, dict) else None
        return list(items) if isinstance(items, list) else []

    def write(self, items: list[dict]) -> None:
        self.session[self.key] = {"items": list(items)}
        self.session.modified = True

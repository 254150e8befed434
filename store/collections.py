"""
Purpose: In-memory route and marker lists kept in step with the store.
What it does:
- load(): replace the local list with what the store holds (newest first)
- create / update / delete all follow one discipline:
    1. apply the change locally
    2. send the request
    3. success -> replace the local copy with the server's record
       failure -> roll the local change back and re-raise StoreError

Rule: collections own the local copy, StoreClient owns the wire.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Generic, Iterator, List, Optional, TypeVar

from routes.models import Marker, Point, Route, RouteColor, new_placeholder_id

from .client import StoreClient, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T", Route, Marker)


class OptimisticCollection(Generic[T]):
    """
    Shared bookkeeping for the route and marker lists.
    """

    kind = "record"

    def __init__(self, client: StoreClient):
        self.client = client
        self._items: List[T] = []

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def all(self) -> List[T]:
        return list(self._items)

    def get(self, item_id: str) -> Optional[T]:
        index = self._index_of(item_id)
        return self._items[index] if index is not None else None

    def _index_of(self, item_id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    def _require_index(self, item_id: str) -> int:
        index = self._index_of(item_id)
        if index is None:
            raise KeyError(f"No {self.kind} with id {item_id}")
        return index

    def _create(self, item: T, send: Callable[[T], T]) -> T:
        placeholder = replace(item, id=new_placeholder_id())
        # newest first, matching the store's listing order
        self._items.insert(0, placeholder)
        try:
            saved = send(placeholder)
        except StoreError:
            logger.warning("Create %s failed, removing local copy %s", self.kind, placeholder.id)
            self._remove_id(placeholder.id)
            raise

        index = self._index_of(placeholder.id)
        if index is None:
            # removed locally while the request was out; the user's removal wins
            logger.info("Created %s %s was removed locally before the store answered", self.kind, saved.id)
        else:
            self._items[index] = saved
        return saved

    def _delete(self, item_id: str, send: Callable[[str], None]) -> None:
        index = self._require_index(item_id)
        removed = self._items.pop(index)
        try:
            send(item_id)
        except StoreError:
            logger.warning("Delete %s %s failed, restoring local copy", self.kind, item_id)
            self._items.insert(min(index, len(self._items)), removed)
            raise

    def _remove_id(self, item_id: str) -> None:
        self._items = [item for item in self._items if item.id != item_id]


class RouteCollection(OptimisticCollection[Route]):
    kind = "route"

    def load(self) -> List[Route]:
        self._items = self.client.list_routes()
        logger.info("Loaded %d routes", len(self._items))
        return self.all()

    def create(self, route: Route) -> Route:
        return self._create(route, self.client.create_route)

    def update_color(self, route_id: str, color) -> Route:
        """
        Recolour a persisted route. Only `color` changes: geometry, text
        fields and identifier stay exactly as they were.
        """
        new_color = RouteColor.parse(color)
        index = self._require_index(route_id)
        previous = self._items[index]
        self._items[index] = previous.with_color(new_color)

        try:
            saved = self.client.update_route(route_id, {"color": new_color.value})
        except StoreError:
            logger.warning("Colour update of route %s failed, rolling back to %s", route_id, previous.color.value)
            current = self._index_of(route_id)
            if current is not None:
                self._items[current] = previous
            raise

        current = self._index_of(route_id)
        if current is not None:
            self._items[current] = saved
        return saved

    def delete(self, route_id: str) -> None:
        self._delete(route_id, self.client.delete_route)


class MarkerCollection(OptimisticCollection[Marker]):
    kind = "marker"

    def load(self) -> List[Marker]:
        self._items = self.client.list_markers()
        logger.info("Loaded %d markers", len(self._items))
        return self.all()

    def create(self, position: Point) -> Marker:
        return self._create(Marker(position=position), self.client.create_marker)

    def delete(self, marker_id: str) -> None:
        self._delete(marker_id, self.client.delete_marker)

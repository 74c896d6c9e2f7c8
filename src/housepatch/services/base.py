"""BaseService — shared foundation for housepatch services.

Every service receives a :class:`HouseStore` at construction time and
uses it for all data access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from housepatch.infrastructure.repository import HouseStore


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class HouseService(BaseService):
            def get_house(self, house_id: str) -> ServiceResult:
                house = self._store.find_by_id(...)
                ...
    """

    def __init__(self, store: HouseStore) -> None:
        self._store = store

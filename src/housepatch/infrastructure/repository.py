"""HouseRepository — the aggregate store over SQLAlchemy Core.

The service layer only depends on the :class:`HouseStore` protocol:
``find_by_id`` and ``persist`` for updates, plus ``list_houses``,
``add`` and ``remove``. Every write runs inside one ``engine.begin()``
transaction, so a failed persist leaves the stored aggregate untouched.
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import delete, insert, select

from housepatch.domain.models import Address, House, Room
from housepatch.infrastructure.database.schema import addresses, houses, rooms

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class HouseStore(Protocol):
    """What the service layer needs from persistence."""

    def find_by_id(self, house_id: uuid.UUID) -> House | None: ...

    def persist(self, house: House) -> None: ...

    def list_houses(self) -> list[House]: ...

    def add(self, house: House) -> None: ...

    def remove(self, house: House) -> None: ...


class HouseRepository:
    """SQLite-backed :class:`HouseStore`."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def close(self) -> None:
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_by_id(self, house_id: uuid.UUID) -> House | None:
        with self._engine.connect() as conn:
            row = conn.execute(select(houses).where(houses.c.id == str(house_id))).first()
            if row is None:
                return None
            return _load_house(conn, row)

    def list_houses(self) -> list[House]:
        with self._engine.connect() as conn:
            rows = conn.execute(select(houses).order_by(houses.c.name, houses.c.id)).fetchall()
            return [_load_house(conn, row) for row in rows]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add(self, house: House) -> None:
        with self._engine.begin() as conn:
            conn.execute(insert(houses).values(**_house_values(house)))
            _write_children(conn, house)
        logger.debug("Added house %s", house.id)

    def persist(self, house: House) -> None:
        """Write the whole aggregate back: house row, address, and rooms.

        Raises:
            LookupError: if the house row no longer exists.
        """
        house_id = str(house.id)
        with self._engine.begin() as conn:
            result = conn.execute(
                houses.update().where(houses.c.id == house_id).values(**_house_values(house))
            )
            if result.rowcount == 0:
                raise LookupError(f"House {house_id} disappeared before it could be saved")
            conn.execute(delete(addresses).where(addresses.c.house_id == house_id))
            conn.execute(delete(rooms).where(rooms.c.house_id == house_id))
            _write_children(conn, house)
        logger.debug("Persisted house %s", house.id)

    def remove(self, house: House) -> None:
        house_id = str(house.id)
        with self._engine.begin() as conn:
            conn.execute(delete(rooms).where(rooms.c.house_id == house_id))
            conn.execute(delete(addresses).where(addresses.c.house_id == house_id))
            conn.execute(delete(houses).where(houses.c.id == house_id))
        logger.debug("Removed house %s", house.id)


# ---------------------------------------------------------------------------
# Row mapping
# ---------------------------------------------------------------------------


def _house_values(house: House) -> dict[str, Any]:
    return {
        "id": str(house.id),
        "name": house.name,
        "color": house.color,
        "area": str(house.area),
    }


def _write_children(conn: Connection, house: House) -> None:
    house_id = str(house.id)
    if house.address is not None:
        a = house.address
        conn.execute(
            insert(addresses).values(
                id=str(a.id),
                house_id=house_id,
                street=a.street,
                house_number=a.house_number,
                flat_number=a.flat_number,
                city=a.city,
                country=a.country,
            )
        )
    if house.rooms:
        conn.execute(
            insert(rooms),
            [
                {
                    "id": str(room.id),
                    "house_id": house_id,
                    "position": position,
                    "name": room.name,
                    "color": room.color,
                    "area": str(room.area),
                }
                for position, room in enumerate(house.rooms)
            ],
        )


def _load_house(conn: Connection, row: Row[Any]) -> House:
    address_row = conn.execute(select(addresses).where(addresses.c.house_id == row.id)).first()
    room_rows = conn.execute(
        select(rooms).where(rooms.c.house_id == row.id).order_by(rooms.c.position)
    ).fetchall()

    address = None
    if address_row is not None:
        address = Address(
            id=uuid.UUID(address_row.id),
            street=address_row.street,
            house_number=address_row.house_number,
            flat_number=address_row.flat_number,
            city=address_row.city,
            country=address_row.country,
        )

    return House(
        id=uuid.UUID(row.id),
        name=row.name,
        color=row.color,
        area=Decimal(row.area),
        address=address,
        rooms=[
            Room(id=uuid.UUID(r.id), name=r.name, color=r.color, area=Decimal(r.area))
            for r in room_rows
        ],
    )

"""Sample houses for a fresh database.

``sample_houses()`` builds new aggregates on every call; the models are
mutable and callers are free to change what they get back.
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from housepatch.domain.models import Address, House, Room

if TYPE_CHECKING:
    from housepatch.infrastructure.repository import HouseStore

logger = logging.getLogger(__name__)

FIRST_HOUSE_ID = uuid.UUID("7b4283fe-d046-4766-8015-ad4e50df4f67")
SECOND_HOUSE_ID = uuid.UUID("2d6dea12-f724-45ad-adfb-c04703a41805")
ADDRESSLESS_HOUSE_ID = uuid.UUID("d93291cc-2434-48c0-bf50-ff65505c1aa7")

# (house id, name, address id, street, house number, flat number)
_HOUSES: tuple[tuple[str, str, str | None, str, str, str | None], ...] = (
    (str(FIRST_HOUSE_ID), "First House", "f98247b5-bc43-410f-92f0-38668ddb7e9b", "Street1", "1", None),
    (str(SECOND_HOUSE_ID), "Second House", "65c1688a-8427-4635-9387-cbb436c81305", "Street2", "2", None),
    ("37f05632-8c35-4afe-a472-f3a57924d0b8", "Third House", "9bb47c15-cbfb-4edb-9595-b0f04c60b6bb", "Street3", "3", None),
    ("4c6113de-2384-422c-986c-71fd5f23d7ef", "Fourth House", "8d285b9f-db96-4b15-9de7-c3203f98b164", "Street4", "4", "1"),
    ("be96327b-ec6a-477a-a4db-476b49767e23", "Fifth House", "da8e751b-3cca-4a2a-8e59-5e8392c571b3", "Street5", "5", None),
    ("d4259385-813a-44d3-a114-5a898833cf2f", "Sixth House", "78358f9b-24b9-4eea-bb2c-d34efaa24858", "Street6", "6", None),
    ("1c261f07-e875-4b06-9d3d-03661f367352", "Seventh House", "8d8b6f53-3098-4dd2-ad4e-b4c6d817d00a", "Street7", "7", None),
    ("c83ecbad-1193-48c2-b3a8-0e268148379f", "Eighth House", "8ad26a6d-beaa-4287-bbff-2e8c76eaabaa", "Street8", "8", None),
    ("21c5a65d-5856-47c5-8cd3-04075c6271c1", "Ninth House", "eb064491-6fa7-4c77-bdc4-cdc0fd9add6a", "Street9", "9", None),
    ("afc0d0fd-9321-4757-8906-d33b99dec91c", "Tenth House", "e5a79133-9f1b-4107-a7b3-78731f66a6ed", "Street10", "10", None),
    (str(ADDRESSLESS_HOUSE_ID), "Eleventh House", None, "", "", None),
)  # fmt: skip

# house id -> (room id, name, color, area)
_ROOMS: dict[str, tuple[tuple[str, str, str, int], ...]] = {
    str(SECOND_HOUSE_ID): (
        ("b6a448f4-4b77-4591-9530-d145b770a2e6", "Restroom", "Green", 11),
        ("0a1826a1-7846-4f8a-a44e-a0efb93c25be", "Kids Room", "Pink", 20),
    ),
    "37f05632-8c35-4afe-a472-f3a57924d0b8": (
        ("db756d1d-7175-4fa6-8ca5-c70ebbcc099f", "Restroom", "Green", 11),
    ),
}


def sample_houses() -> list[House]:
    houses = []
    for house_id, name, address_id, street, number, flat in _HOUSES:
        address = None
        if address_id is not None:
            address = Address.create(
                street, number, "City1", "Country1", flat_number=flat, id=uuid.UUID(address_id)
            )
        rooms = [
            Room.create(room_name, color, area, id=uuid.UUID(room_id))
            for room_id, room_name, color, area in _ROOMS.get(house_id, ())
        ]
        houses.append(
            House.create(name, "Red", Decimal(25), address, rooms, id=uuid.UUID(house_id))
        )
    return houses


def seed_store(store: HouseStore) -> int:
    """Add the sample houses to an empty store. Returns how many were added."""
    if store.list_houses():
        logger.debug("Store already holds houses; skipping seed")
        return 0
    houses = sample_houses()
    for house in houses:
        store.add(house)
    logger.debug("Seeded %d houses", len(houses))
    return len(houses)

"""SQLAlchemy Core table definitions for the housepatch database.

Decimals are stored as TEXT so areas round-trip exactly. Room order is
kept in an explicit ``position`` column.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, MetaData, Table, Text, UniqueConstraint

metadata = MetaData()

houses = Table(
    "houses",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text),
    Column("color", Text),
    Column("area", Text, nullable=False, default="0", server_default="0"),
)

addresses = Table(
    "addresses",
    metadata,
    Column("id", Text, primary_key=True),
    Column("house_id", Text, ForeignKey("houses.id", ondelete="CASCADE"), nullable=False),
    Column("street", Text),
    Column("house_number", Text),
    Column("flat_number", Text),
    Column("city", Text),
    Column("country", Text),
    UniqueConstraint("house_id"),
)

rooms = Table(
    "rooms",
    metadata,
    Column("id", Text, primary_key=True),
    Column("house_id", Text, ForeignKey("houses.id", ondelete="CASCADE"), nullable=False),
    Column("position", Integer, nullable=False),
    Column("name", Text),
    Column("color", Text),
    Column("area", Text, nullable=False, default="0", server_default="0"),
)

Index("ix_rooms_house", rooms.c.house_id, rooms.c.position)

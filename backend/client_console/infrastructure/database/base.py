"""Declarative base shared by the clients table and its dependent tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass

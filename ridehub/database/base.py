"""
ORM Base

Declarative base for the relational store. Constraint names follow a
fixed convention so schemas created on different databases line up.
"""

from typing import Any, Dict

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

metadata = MetaData(naming_convention={
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
})

Base = declarative_base(metadata=metadata)


class ModelBase(Base):
    """Store records: plain column mappings with a checked bulk update."""

    __abstract__ = True

    def update(self, data: Dict[str, Any]) -> None:
        """
        Set column values from a mapping of column name to value.

        Raises:
            TypeError: If a key is not a column of this record
        """
        columns = self.__table__.columns.keys()
        unknown = [key for key in data if key not in columns]
        if unknown:
            raise TypeError(f"{type(self).__name__} has no column {unknown[0]!r}")
        for key, value in data.items():
            setattr(self, key, value)

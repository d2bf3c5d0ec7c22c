"""
Database Module

This module provides the ORM base and models used by the relational store.
"""

from ridehub.database.base import Base, ModelBase, metadata
from ridehub.database.models import (
    DriverDocumentRecord,
    DriverProfileRecord,
    RiderProfileRecord,
    UserRecord,
)

__all__ = [
    'Base',
    'ModelBase',
    'metadata',
    'UserRecord',
    'DriverProfileRecord',
    'RiderProfileRecord',
    'DriverDocumentRecord',
]

"""
Store Package

Backends holding identities and role profiles. ``InMemoryStore`` serves
tests and single-process deployments; ``SQLStore`` persists to any
SQLAlchemy-supported database.
"""

from ridehub.store.base import DuplicateEmailError, UserStore
from ridehub.store.memory import InMemoryStore
from ridehub.store.sql import SQLStore

__all__ = [
    'UserStore',
    'DuplicateEmailError',
    'InMemoryStore',
    'SQLStore',
]

"""
Domain errors raised by the storage layer.

main.py maps each of them to an HTTP status once, so routes and storage
never build error responses themselves.
"""

from __future__ import annotations


class StorageError(Exception):
    """Base class for everything the storage layer raises on purpose."""


class ValidationError(StorageError):
    """Input is malformed or references rows that do not exist (400)."""


class NotFound(StorageError):
    """Unknown id on get/update (404)."""

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class DuplicateKey(StorageError):
    """A unique column (slug, username) already holds this value (409)."""


class DuplicateUsername(DuplicateKey):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' already exists")


class DatabaseUnavailable(StorageError):
    """Connection failure or pool exhaustion (503)."""

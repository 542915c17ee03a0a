"""Repository backends for the GoDrive application."""
from typing import Optional

from godrive import config
from godrive.errors import InvalidArgumentError
from godrive.repositories.base import Repository
from godrive.repositories.document import DocumentRepository
from godrive.repositories.memory import InMemoryRepository

STORAGE_BACKENDS = {
    "memory": InMemoryRepository,
    "document": DocumentRepository,
}


def create_repository(storage: Optional[str] = None) -> Repository:
    """
    Build the repository backend named by *storage* (or configuration).

    Raises:
        InvalidArgumentError: If the backend name is unknown
    """
    storage = (storage or config.STORAGE).lower()
    try:
        backend = STORAGE_BACKENDS[storage]
    except KeyError:
        raise InvalidArgumentError(
            "storage", f"must be one of {', '.join(sorted(STORAGE_BACKENDS))}")
    return backend()


__all__ = [
    'Repository',
    'InMemoryRepository',
    'DocumentRepository',
    'STORAGE_BACKENDS',
    'create_repository',
]

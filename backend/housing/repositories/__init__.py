from .base import InMemoryRepository, Repository, SqlRepository

__all__ = ["InMemoryRepository", "Repository", "SqlRepository"]

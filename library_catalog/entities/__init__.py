"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .book import Book, BookDraft, BookRepository, BookTable

__all__ = ["Book", "BookDraft", "BookRepository", "BookTable"]

"""Entity package: Book."""

from .entity import Book, BookDraft
from .repository import BookRepository
from .table import BookTable

__all__ = ["Book", "BookDraft", "BookRepository", "BookTable"]

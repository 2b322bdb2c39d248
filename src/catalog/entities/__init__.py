"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model
- table.py: Database persistence model
"""

from .book import Book, BookCreate, BookTable

__all__ = ["Book", "BookCreate", "BookTable"]

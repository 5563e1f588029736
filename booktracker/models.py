"""Data models for catalog records and search results."""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from booktracker.errors import CatalogError, ErrorKind

ISBN_PATTERN = re.compile(r"[0-9]{13}")


@dataclass(frozen=True)
class Book:
    """A single validated catalog record.
    
    Construction trims title and author and re-checks the record invariants,
    so a ``Book`` that exists is always valid: non-empty title and author,
    a 13-digit ISBN and a positive number of copies.
    """
    title: str
    author: str
    isbn: str
    copies: int
    
    def __post_init__(self):
        # Frozen dataclass, so normalised values go through object.__setattr__
        if isinstance(self.title, str):
            object.__setattr__(self, "title", self.title.strip())
        if isinstance(self.author, str):
            object.__setattr__(self, "author", self.author.strip())
        
        if not isinstance(self.title, str) or not self.title:
            raise CatalogError(ErrorKind.EMPTY_TITLE)
        if not isinstance(self.author, str) or not self.author:
            raise CatalogError(ErrorKind.EMPTY_AUTHOR)
        if not isinstance(self.isbn, str) or not ISBN_PATTERN.fullmatch(self.isbn):
            raise CatalogError(ErrorKind.INVALID_ISBN)
        if isinstance(self.copies, bool) or not isinstance(self.copies, int) or self.copies <= 0:
            raise CatalogError(ErrorKind.INVALID_COPIES)
    
    @property
    def sort_key(self) -> Tuple[str, str]:
        """Case-insensitive (title, author) ordering key."""
        return (self.title.lower(), self.author.lower())


class QueryMode(str, Enum):
    """How a search query is matched against the catalog."""
    EXACT_ISBN = "isbn"
    TITLE_SUBSTRING = "title"


@dataclass(frozen=True)
class SearchOutcome:
    """Result of a catalog search. No matches means NotFound."""
    mode: QueryMode
    query: str
    matches: Tuple[Book, ...] = ()
    
    @property
    def found(self) -> bool:
        """Whether at least one record matched."""
        return bool(self.matches)

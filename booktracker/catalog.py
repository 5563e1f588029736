"""In-memory catalog backed by a flat text file."""
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from booktracker.errors import CatalogError, ErrorKind
from booktracker.models import Book
from booktracker.parse import parse_book, serialize_book

logger = logging.getLogger(__name__)

LoadFailure = Tuple[str, CatalogError]


def load_records(lines: Iterable[str]) -> Tuple[List[Book], List[LoadFailure]]:
    """
    Parse catalog lines into records, collecting rejected lines.
    
    Blank lines are skipped. Records keep their file order; the catalog is
    only re-sorted when a record is added.
    
    Args:
        lines: Raw catalog lines (trailing newlines allowed)
    
    Returns:
        Tuple of (valid books, list of (offending line, error))
    """
    books: List[Book] = []
    failures: List[LoadFailure] = []
    
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            books.append(parse_book(line))
        except CatalogError as e:
            logger.warning(f"Rejected catalog line {line!r}: {e.kind.value}: {e.message}")
            failures.append((line, e))
    
    return books, failures


class CatalogStore:
    """Ordered collection of catalog records persisted to a text file."""
    
    def __init__(
        self,
        path,
        books: Optional[Iterable[Book]] = None,
        encoding: str = "utf-8"
    ):
        """
        Initialize the store.
        
        Args:
            path: Backing catalog file
            books: Initial records, kept in the given order
            encoding: Text encoding of the catalog file
        """
        self.path = Path(path)
        self.encoding = encoding
        self._books: List[Book] = list(books or [])
    
    @classmethod
    def from_lines(
        cls,
        path,
        lines: Iterable[str],
        encoding: str = "utf-8"
    ) -> Tuple["CatalogStore", List[LoadFailure]]:
        """Build a store from raw lines, returning it with the rejected lines."""
        books, failures = load_records(lines)
        return cls(path, books, encoding=encoding), failures
    
    @property
    def books(self) -> Tuple[Book, ...]:
        """Current records in catalog order."""
        return tuple(self._books)
    
    def __len__(self) -> int:
        return len(self._books)
    
    def __iter__(self) -> Iterator[Book]:
        return iter(self.books)
    
    def sort(self):
        """Sort by title, then author, both case-insensitive."""
        self._books.sort(key=lambda book: book.sort_key)
    
    def add(self, book: Book) -> Tuple[Book, ...]:
        """
        Add a record, re-sort the catalog and rewrite the backing file.
        
        Adding the same record twice keeps both copies. If the file cannot
        be written the record stays in memory and the error is raised.
        
        Args:
            book: Record to add
        
        Returns:
            The sorted catalog
        
        Raises:
            CatalogError: PersistFailure when the file cannot be written
        """
        self._books.append(book)
        self.sort()
        logger.info(f"Added '{book.title}' by {book.author} ({len(self._books)} records)")
        self.persist()
        return self.books
    
    def persist(self):
        """
        Rewrite the whole catalog file from memory.
        
        The text is encoded before the file is opened, so a record that
        cannot be encoded leaves the previous file intact.
        
        Raises:
            CatalogError: PersistFailure when the file cannot be written
        """
        try:
            data = "".join(serialize_book(book) + "\n" for book in self._books).encode(self.encoding)
            with open(self.path, "wb") as f:
                f.write(data)
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to write catalog {self.path}: {e}")
            raise CatalogError(
                ErrorKind.PERSIST_FAILURE,
                f"Failed to write to catalog: {e}"
            ) from e
        
        logger.info(f"Persisted {len(self._books)} records to {self.path}")

"""ISBN and title search over catalog records."""
import logging
from typing import Iterable

from booktracker.errors import CatalogError, ErrorKind
from booktracker.models import Book, ISBN_PATTERN, QueryMode, SearchOutcome

logger = logging.getLogger(__name__)


def classify_query(query: str) -> QueryMode:
    """Exact ISBN lookup for a bare 13-digit query, title substring otherwise."""
    if ISBN_PATTERN.fullmatch(query.strip()):
        return QueryMode.EXACT_ISBN
    return QueryMode.TITLE_SUBSTRING


def search_catalog(query: str, books: Iterable[Book]) -> SearchOutcome:
    """
    Search catalog records by ISBN or title.
    
    An ISBN query must match at most one record; more than one means the
    catalog is inconsistent and is raised as an error. A title query
    returns every case-insensitive substring match in catalog order.
    
    Args:
        query: Search query
        books: Records in catalog order
    
    Returns:
        SearchOutcome (no matches means not found)
    
    Raises:
        CatalogError: DuplicateISBN when several records share the ISBN
    """
    clean_query = query.strip()
    mode = classify_query(clean_query)
    logger.info(f"Searching by {mode.value}: {clean_query!r}")
    
    if mode is QueryMode.EXACT_ISBN:
        matches = [book for book in books if book.isbn == clean_query]
        if len(matches) > 1:
            raise CatalogError(
                ErrorKind.DUPLICATE_ISBN,
                f"Multiple books found with ISBN: {clean_query}"
            )
    else:
        needle = clean_query.lower()
        matches = [book for book in books if needle in book.title.lower()]
    
    return SearchOutcome(mode=mode, query=clean_query, matches=tuple(matches))

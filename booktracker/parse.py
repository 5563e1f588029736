"""Parse and serialize colon-delimited catalog records."""
import re
from typing import List

from booktracker.errors import CatalogError, ErrorKind
from booktracker.models import Book, ISBN_PATTERN

FIELD_SEPARATOR = ":"
RECORD_FIELDS = 4

COPIES_PATTERN = re.compile(r"[0-9]+")


def split_fields(line: str) -> List[str]:
    """
    Split a catalog line into raw fields.
    
    Trailing empty fields are dropped, so ``"A:B:1234567890123:"`` has
    three fields while ``"A::1234567890123:3"`` keeps its empty author.
    
    Args:
        line: Raw catalog line
    
    Returns:
        List of untrimmed field strings
    """
    fields = line.split(FIELD_SEPARATOR)
    while len(fields) > 1 and fields[-1] == "":
        fields.pop()
    return fields


def parse_book(line: str) -> Book:
    """
    Parse a single catalog line into a validated Book.
    
    Rules are checked in order (field count, title, author, ISBN, copies)
    and only the first failing rule is reported. Fields past the fourth
    are ignored.
    
    Args:
        line: Raw catalog line in ``title:author:isbn:copies`` form
    
    Returns:
        Book object
    
    Raises:
        CatalogError: If the line is not a well-formed record
    """
    fields = split_fields(line)
    if len(fields) < RECORD_FIELDS:
        raise CatalogError(ErrorKind.MISSING_FIELDS)
    
    title = fields[0].strip()
    author = fields[1].strip()
    isbn = fields[2].strip()
    copies = fields[3].strip()
    
    if not title:
        raise CatalogError(ErrorKind.EMPTY_TITLE)
    if not author:
        raise CatalogError(ErrorKind.EMPTY_AUTHOR)
    if not ISBN_PATTERN.fullmatch(isbn):
        raise CatalogError(ErrorKind.INVALID_ISBN)
    if not COPIES_PATTERN.fullmatch(copies) or int(copies) <= 0:
        raise CatalogError(ErrorKind.INVALID_COPIES)
    
    return Book(title=title, author=author, isbn=isbn, copies=int(copies))


def serialize_book(book: Book) -> str:
    """Format a Book as its canonical ``title:author:isbn:copies`` line."""
    return FIELD_SEPARATOR.join([book.title, book.author, book.isbn, str(book.copies)])


def is_add_payload(operation: str) -> bool:
    """
    Decide whether an operation string is a record to add.
    
    Anything with a colon that splits into at least four fields is an add;
    everything else is a search query. A title query containing three or
    more colons is therefore read as an add.
    
    Args:
        operation: Operation string from the command line
    
    Returns:
        True for an add payload, False for a search query
    """
    return FIELD_SEPARATOR in operation and len(split_fields(operation)) >= RECORD_FIELDS

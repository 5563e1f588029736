"""Error kinds raised by catalog parsing, search and persistence."""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Every failure the tracker can report, by the name written to the error log."""
    MISSING_FIELDS = "MissingFields"
    EMPTY_TITLE = "EmptyTitle"
    EMPTY_AUTHOR = "EmptyAuthor"
    INVALID_ISBN = "InvalidISBN"
    INVALID_COPIES = "InvalidCopies"
    DUPLICATE_ISBN = "DuplicateISBN"
    PERSIST_FAILURE = "PersistFailure"
    INSUFFICIENT_ARGUMENTS = "InsufficientArguments"
    INVALID_FILE_NAME = "InvalidFileName"
    INVALID_ARGUMENTS = "InvalidArguments"


DEFAULT_MESSAGES = {
    ErrorKind.MISSING_FIELDS: "Book entry has missing fields",
    ErrorKind.EMPTY_TITLE: "Book entry has empty title",
    ErrorKind.EMPTY_AUTHOR: "Book entry has empty author",
    ErrorKind.INVALID_ISBN: "ISBN is not exactly 13 digits or contains non-numeric characters",
    ErrorKind.INVALID_COPIES: "Invalid copies (not a positive integer)",
}


class CatalogError(Exception):
    """A tagged catalog failure carrying an ``ErrorKind`` and a message."""
    
    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        if message is None:
            message = DEFAULT_MESSAGES.get(kind, kind.value)
        super().__init__(message)
        self.kind = kind
        self.message = message
    
    def __str__(self) -> str:
        return self.message
    
    def __repr__(self) -> str:
        return f"CatalogError({self.kind.value}, {self.message!r})"

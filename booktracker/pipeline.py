"""Operation stage and run summary of the tracker pipeline."""
import logging
from dataclasses import dataclass
from typing import Optional

from booktracker.catalog import CatalogStore
from booktracker.errors import CatalogError, ErrorKind
from booktracker.ingest import IngestResult
from booktracker.models import Book, SearchOutcome
from booktracker.parse import is_add_payload, parse_book
from booktracker.search import search_catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """What a single add or search did."""
    operation: str
    added: Optional[Book] = None
    outcome: Optional[SearchOutcome] = None
    error: Optional[CatalogError] = None
    
    @property
    def books_added(self) -> int:
        return 1 if self.added is not None else 0
    
    @property
    def search_results(self) -> int:
        return len(self.outcome.matches) if self.outcome is not None else 0
    
    @property
    def errors(self) -> int:
        return 1 if self.error is not None else 0


@dataclass(frozen=True)
class RunSummary:
    """Totals printed at the end of a run."""
    valid_records: int = 0
    search_results: int = 0
    books_added: int = 0
    errors_encountered: int = 0
    
    @classmethod
    def collect(
        cls,
        ingest: Optional[IngestResult] = None,
        operation: Optional[OperationResult] = None
    ) -> "RunSummary":
        """
        Aggregate stage results into run totals.
        
        Args:
            ingest: Result of the ingest stage, if it ran
            operation: Result of the operation stage, if it ran
        
        Returns:
            RunSummary
        """
        valid = ingest.valid_records if ingest else 0
        errors = ingest.errors if ingest else 0
        search_results = books_added = 0
        
        if operation is not None:
            search_results = operation.search_results
            books_added = operation.books_added
            errors += operation.errors
        
        return cls(
            valid_records=valid,
            search_results=search_results,
            books_added=books_added,
            errors_encountered=errors
        )


def run_operation(operation: str, store: CatalogStore, reporter) -> OperationResult:
    """
    Dispatch an operation string to an add or a search.
    
    Must only be called once ingest has finished building ``store``.
    Failures are reported to the error log with the operation string as
    the offending line and end this operation only. When the catalog
    cannot be rewritten the book still counts as added, since it stays
    in memory.
    
    Args:
        operation: Add payload (``title:author:isbn:copies``) or query
        store: Fully loaded catalog
        reporter: Collaborator with ``report_error(line, kind, message)``
    
    Returns:
        OperationResult
    """
    book = None
    try:
        if is_add_payload(operation):
            book = parse_book(operation)
            store.add(book)
            return OperationResult(operation=operation, added=book)
        
        outcome = search_catalog(operation, store.books)
        logger.info(f"Search found {len(outcome.matches)} record(s)")
        return OperationResult(operation=operation, outcome=outcome)
    
    except CatalogError as e:
        logger.warning(f"Operation failed: {e.kind.value}: {e.message}")
        reporter.report_error(operation, e.kind, e.message)
        added = book if e.kind is ErrorKind.PERSIST_FAILURE else None
        return OperationResult(operation=operation, added=added, error=e)

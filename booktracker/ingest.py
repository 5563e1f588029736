"""Load a catalog file, routing rejected lines to the error log."""
import logging
from dataclasses import dataclass
from pathlib import Path

from booktracker.catalog import CatalogStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestResult:
    """Loaded catalog plus the counters of the ingest stage."""
    store: CatalogStore
    valid_records: int
    errors: int


def ensure_catalog_file(path: Path):
    """Create the catalog file and its directory if missing, never truncating."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(exist_ok=True)


def ingest_catalog(path, reporter, encoding: str = "utf-8") -> IngestResult:
    """
    Build a CatalogStore from the backing file.
    
    Every rejected line is passed to ``reporter.report_error``; one bad
    line never aborts the load. If the file cannot be read, an empty
    catalog is returned.
    
    Args:
        path: Catalog file path
        reporter: Collaborator with ``report_error(line, kind, message)``
        encoding: Text encoding of the catalog file
    
    Returns:
        IngestResult with the store and its counters
    """
    path = Path(path)
    logger.info(f"Loading catalog: {path}")
    
    try:
        ensure_catalog_file(path)
        with open(path, "r", encoding=encoding, errors="replace") as f:
            store, failures = CatalogStore.from_lines(path, f, encoding=encoding)
    except OSError as e:
        logger.error(f"Error accessing file {path}: {e}")
        return IngestResult(store=CatalogStore(path, encoding=encoding), valid_records=0, errors=0)
    
    for line, error in failures:
        reporter.report_error(line, error.kind, error.message)
    
    logger.info(f"File loading complete: {len(store)} valid, {len(failures)} rejected")
    return IngestResult(store=store, valid_records=len(store), errors=len(failures))

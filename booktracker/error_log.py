"""Append-only log of rejected catalog input."""
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from booktracker.errors import ErrorKind

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
DEFAULT_LOG_NAME = "errors.log"


def error_log_path(catalog_path, log_name: str = DEFAULT_LOG_NAME) -> Path:
    """
    Locate the error log for a catalog file.
    
    The log sits next to the catalog; a bare file name has ``.`` as its
    parent, which puts the log in the current working directory.
    
    Args:
        catalog_path: Path to the catalog file
        log_name: File name of the error log
    
    Returns:
        Path of the error log
    """
    return Path(catalog_path).parent / log_name


class ErrorLog:
    """Writes one line per rejected input to the error log file."""
    
    def __init__(
        self,
        path,
        clock: Optional[Callable[[], datetime]] = None,
        encoding: str = "utf-8"
    ):
        """
        Initialize the error log.
        
        Args:
            path: Error log file (created on first write)
            clock: Timestamp source, local time by default
            encoding: Text encoding of the log file
        """
        self.path = Path(path)
        self.clock = clock or datetime.now
        self.encoding = encoding
    
    @classmethod
    def for_catalog(cls, catalog_path, log_name: str = DEFAULT_LOG_NAME, **kwargs) -> "ErrorLog":
        """Error log living alongside the given catalog file."""
        return cls(error_log_path(catalog_path, log_name), **kwargs)
    
    def format_entry(self, offending_line: str, kind: ErrorKind, message: str) -> str:
        """Format a single log entry without the trailing newline."""
        timestamp = self.clock().strftime(TIMESTAMP_FORMAT)
        return f'[{timestamp}] INVALID INPUT: "{offending_line}" - {kind.value}: {message}'
    
    def report_error(self, offending_line: str, kind: ErrorKind, message: str):
        """
        Append an entry for a rejected line.
        
        Characters the log encoding cannot represent are written as
        backslash escapes. A log that cannot be written is reported through
        ``logging`` and otherwise ignored.
        
        Args:
            offending_line: The input that was rejected
            kind: Error kind
            message: Human-readable reason
        """
        entry = self.format_entry(offending_line, kind, message)
        try:
            with open(self.path, "a", encoding=self.encoding, errors="backslashreplace") as f:
                f.write(entry + "\n")
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to write to error log {self.path}: {e}")

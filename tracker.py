#!/usr/bin/env python3
"""Library Book Tracker CLI - flat-file catalog add & search."""
import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from tabulate import tabulate

from booktracker.config import Config
from booktracker.error_log import ErrorLog
from booktracker.errors import CatalogError, ErrorKind
from booktracker.ingest import ingest_catalog
from booktracker.models import Book, QueryMode
from booktracker.pipeline import OperationResult, RunSummary, run_operation

logger = logging.getLogger(__name__)

HEADERS = ["Title", "Author", "ISBN", "Copies"]


def setup_logging(config: Config, verbose: bool = False):
    """Configure root logging for the run."""
    logging.basicConfig(
        level=logging.INFO if verbose else config.LOG_LEVEL,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def validate_arguments(positionals: List[str], config: Config) -> Tuple[str, str]:
    """
    Check the positional arguments.
    
    Only the first two are used; extra arguments are ignored.
    
    Args:
        positionals: Positional arguments in command-line order
        config: Application configuration
    
    Returns:
        Tuple of (catalog path, operation)
    
    Raises:
        CatalogError: InsufficientArguments or InvalidFileName
    """
    if len(positionals) < 2:
        raise CatalogError(ErrorKind.INSUFFICIENT_ARGUMENTS, "Need at least 2 arguments")
    
    catalog, operation = positionals[0], positionals[1]
    
    if not catalog.endswith(config.CATALOG_EXTENSION):
        raise CatalogError(
            ErrorKind.INVALID_FILE_NAME,
            f"File name must end with {config.CATALOG_EXTENSION}"
        )
    
    return catalog, operation


def display_books(books: List[Book], format_type: str):
    """Display books in specified format."""
    if format_type == "table":
        rows = [[book.title, book.author, book.isbn, book.copies] for book in books]
        print(tabulate(rows, headers=HEADERS, tablefmt="simple"))
    
    elif format_type == "json":
        books_dict = [
            {
                "title": book.title,
                "author": book.author,
                "isbn": book.isbn,
                "copies": book.copies
            }
            for book in books
        ]
        print(json.dumps(books_dict, indent=2))
    
    elif format_type == "compact":
        for i, book in enumerate(books, 1):
            print(f"{i}. {book.title} - {book.author} ({book.isbn}) x{book.copies}")


def display_result(result: OperationResult, format_type: str):
    """Print the outcome of an add or search."""
    if result.error is not None:
        print(f"Error: {result.error.message}")
        return
    
    if result.added is not None:
        print(f"Book added successfully: {result.added.title} by {result.added.author}")
        display_books([result.added], format_type)
        return
    
    outcome = result.outcome
    if outcome.found:
        display_books(list(outcome.matches), format_type)
    elif outcome.mode is QueryMode.EXACT_ISBN:
        print(f"No book found with ISBN: {outcome.query}")
    else:
        print(f"No books found matching title: {outcome.query}")


def print_summary(summary: RunSummary):
    """Print the final run statistics."""
    print("\n--- Final Statistics ---")
    print(f"Valid records processed: {summary.valid_records}")
    print(f"Search results found: {summary.search_results}")
    print(f"Books added: {summary.books_added}")
    print(f"Errors encountered: {summary.errors_encountered}")


class TrackerArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises usage errors instead of exiting."""
    
    def error(self, message):
        raise CatalogError(ErrorKind.INVALID_ARGUMENTS, message)


def build_parser() -> argparse.ArgumentParser:
    parser = TrackerArgumentParser(
        description="Library Book Tracker - flat-file catalog CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search by title substring
  %(prog)s books.txt "library"

  # Search by ISBN
  %(prog)s books.txt 9780131103627

  # Add a record
  %(prog)s books.txt "The C Programming Language:Kernighan:9780131103627:3"
        """
    )
    
    parser.add_argument(
        "positionals",
        nargs="*",
        metavar="ARG",
        help="Catalog file (.txt), then a record to add (title:author:isbn:copies) or a search query"
    )
    parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress at INFO level")
    return parser


def parse_arguments(parser: argparse.ArgumentParser, argv: Optional[List[str]] = None):
    """
    Parse the command line, keeping unrecognised tokens as positionals.
    
    A search query that starts with ``-`` is not a known option, so it is
    returned in command-line order after the positionals argparse matched.
    
    Returns:
        Tuple of (parsed options, positional arguments)
    """
    args, extras = parser.parse_known_args(argv)
    return args, list(args.positionals) + extras


def raw_positionals(argv: List[str]) -> List[str]:
    """Positional tokens of an argv that failed to parse, skipping known options."""
    positionals = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--format":
            next(tokens, None)
        elif token.startswith("--format=") or token in ("-v", "--verbose"):
            continue
        else:
            positionals.append(token)
    return positionals


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    config = Config()
    parser = build_parser()
    
    positionals: List[str] = []
    ingest = None
    operation = None
    exit_code = 0
    
    try:
        args, positionals = parse_arguments(parser, argv)
        setup_logging(config, args.verbose)
        
        catalog_path, op = validate_arguments(positionals, config)
        error_log = ErrorLog.for_catalog(
            catalog_path, config.ERROR_LOG_NAME, encoding=config.CATALOG_ENCODING
        )
        
        # Operation stage only starts once ingest has finished
        ingest = ingest_catalog(catalog_path, error_log, encoding=config.CATALOG_ENCODING)
        operation = run_operation(op, ingest.store, error_log)
        display_result(operation, args.format)
    
    except CatalogError as e:
        print(f"Failure: {e.message}", file=sys.stderr)
        if e.kind is ErrorKind.INVALID_ARGUMENTS:
            positionals = raw_positionals(sys.argv[1:] if argv is None else argv)
        if len(positionals) >= 2:
            ErrorLog.for_catalog(
                positionals[0], config.ERROR_LOG_NAME, encoding=config.CATALOG_ENCODING
            ).report_error(positionals[1], e.kind, e.message)
        exit_code = 1
    
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    
    finally:
        print_summary(RunSummary.collect(ingest, operation))
        print("Thank you for using the Library Book Tracker.")
    
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

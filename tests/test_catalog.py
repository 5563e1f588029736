"""Tests for the catalog store."""
import pytest

from booktracker.catalog import CatalogStore, load_records
from booktracker.errors import CatalogError, ErrorKind
from booktracker.models import Book
from booktracker.parse import parse_book


def test_load_records_keeps_file_order():
    """Test that loading does not sort records."""
    books, failures = load_records([
        "Zeta:Bob:1111111111111:2\n",
        "Alpha:Amy:2222222222222:1\n",
    ])
    
    assert [b.title for b in books] == ["Zeta", "Alpha"]
    assert failures == []


def test_load_records_skips_blank_lines():
    """Test that blank lines are neither records nor errors."""
    books, failures = load_records(["\n", "   \n", "Dune:Frank Herbert:9780441013593:2\n", ""])
    
    assert len(books) == 1
    assert failures == []


def test_load_records_collects_failures():
    """Test that bad lines are returned with their error."""
    books, failures = load_records([
        "Dune:Frank Herbert:9780441013593:2\n",
        "Only:Two\n",
        "A:B:12345:5\r\n",
    ])
    
    assert len(books) == 1
    assert [(line, error.kind) for line, error in failures] == [
        ("Only:Two", ErrorKind.MISSING_FIELDS),
        ("A:B:12345:5", ErrorKind.INVALID_ISBN),
    ]


def test_add_sorts_and_persists(tmp_path):
    """Test that adding re-sorts by title and rewrites the file."""
    path = tmp_path / "books.txt"
    store = CatalogStore(path)
    
    store.add(parse_book("Zeta:Bob:1111111111111:2"))
    store.add(parse_book("Alpha:Amy:2222222222222:1"))
    
    assert [b.title for b in store] == ["Alpha", "Zeta"]
    assert path.read_text() == "Alpha:Amy:2222222222222:1\nZeta:Bob:1111111111111:2\n"


def test_add_sorts_case_insensitively_by_title_then_author(tmp_path):
    """Test the secondary author ordering and case folding."""
    store = CatalogStore(tmp_path / "books.txt", [
        Book("beta", "Zed", "1111111111111", 1),
        Book("Beta", "adams", "2222222222222", 1),
    ])
    
    store.add(Book("ALPHA", "Cole", "3333333333333", 1))
    
    assert [(b.title, b.author) for b in store] == [
        ("ALPHA", "Cole"),
        ("Beta", "adams"),
        ("beta", "Zed"),
    ]


def test_add_same_record_twice_keeps_both(tmp_path):
    """Test that the catalog does not deduplicate."""
    path = tmp_path / "books.txt"
    store = CatalogStore(path)
    book = Book("Dune", "Frank Herbert", "9780441013593", 2)
    
    store.add(book)
    store.add(book)
    
    assert len(store) == 2
    assert path.read_text().count("Dune:Frank Herbert:9780441013593:2") == 2


def test_add_persist_failure_keeps_memory(tmp_path):
    """Test that a write failure is raised but the record stays in memory."""
    store = CatalogStore(tmp_path / "missing-dir" / "books.txt")
    book = Book("Dune", "Frank Herbert", "9780441013593", 2)
    
    with pytest.raises(CatalogError) as exc_info:
        store.add(book)
    
    assert exc_info.value.kind is ErrorKind.PERSIST_FAILURE
    assert store.books == (book,)


def test_from_lines(tmp_path):
    """Test building a store with its rejected lines."""
    store, failures = CatalogStore.from_lines(
        tmp_path / "books.txt",
        ["Dune:Frank Herbert:9780441013593:2", "A::1234567890123:3"]
    )
    
    assert len(store) == 1
    assert failures[0][1].kind is ErrorKind.EMPTY_AUTHOR


def test_persist_encoding_failure_keeps_previous_file(tmp_path):
    """Test that an unencodable record does not truncate the catalog."""
    path = tmp_path / "books.txt"
    store = CatalogStore(path)
    store.add(Book("Alpha", "Amy", "2222222222222", 1))
    store.add(Book("Zeta", "Bob", "1111111111111", 2))
    
    with pytest.raises(CatalogError) as exc_info:
        store.add(Book("M\udcff", "Cat", "3333333333333", 1))
    
    assert exc_info.value.kind is ErrorKind.PERSIST_FAILURE
    assert len(store) == 3
    assert path.read_text() == "Alpha:Amy:2222222222222:1\nZeta:Bob:1111111111111:2\n"


def test_add_returns_sorted_tuple(tmp_path):
    """Test that add hands back the sorted catalog as a tuple."""
    store = CatalogStore(tmp_path / "books.txt", [Book("Zeta", "Bob", "1111111111111", 2)])
    alpha = Book("Alpha", "Amy", "2222222222222", 1)
    
    result = store.add(alpha)
    
    assert isinstance(result, tuple)
    assert result == (alpha, Book("Zeta", "Bob", "1111111111111", 2))

"""
Unit tests for the quote store
"""

import pytest
import random
import threading

from homepage import QuoteStore
from utils.exceptions import QuoteStoreError, ErrorCodes


@pytest.mark.unit
class TestQuoteStore:
    """Test cases for QuoteStore class"""

    def test_size_and_get(self, quote_store, sample_quotes):
        """Test size and indexed access"""
        assert quote_store.size() == len(sample_quotes)
        assert len(quote_store) == len(sample_quotes)
        for index, quote in enumerate(sample_quotes):
            assert quote_store.get(index) == quote

    def test_get_out_of_range(self, quote_store):
        """Test indexed access outside the list"""
        with pytest.raises(IndexError):
            quote_store.get(quote_store.size())

        with pytest.raises(IndexError):
            quote_store.get(-1)

    def test_empty_list_fails_fast(self):
        """Test that an empty quote list is rejected"""
        with pytest.raises(QuoteStoreError) as exc_info:
            QuoteStore([])

        assert exc_info.value.error_code == ErrorCodes.QUOTES_EMPTY

    def test_quotes_are_immutable(self, sample_quotes):
        """Test that the store is not affected by the source list"""
        store = QuoteStore(sample_quotes)
        sample_quotes.append("added later")

        assert store.size() == 3
        assert isinstance(store.quotes, tuple)

    def test_random_quote_membership(self, quote_store, sample_quotes):
        """Test that drawn quotes always come from the list"""
        for _ in range(200):
            assert quote_store.random_quote() in sample_quotes

    def test_random_index_range(self, quote_store):
        """Test that drawn indexes stay in [0, size)"""
        indexes = {quote_store.random_index() for _ in range(300)}
        assert indexes <= set(range(quote_store.size()))
        # 300 次抽取应覆盖全部 3 条
        assert indexes == set(range(quote_store.size()))

    def test_seeded_generator_is_reproducible(self, sample_quotes):
        """Test that stores with equal seeds draw the same sequence"""
        first = QuoteStore(sample_quotes, rng=random.Random(7))
        second = QuoteStore(sample_quotes, rng=random.Random(7))

        assert [first.random_quote() for _ in range(20)] == [second.random_quote() for _ in range(20)]

    def test_concurrent_draws(self, quote_store, sample_quotes):
        """Test drawing from several threads at once"""
        results = []
        results_lock = threading.Lock()

        def draw():
            drawn = [quote_store.random_quote() for _ in range(100)]
            with results_lock:
                results.extend(drawn)

        threads = [threading.Thread(target=draw) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 800
        assert set(results) <= set(sample_quotes)


@pytest.mark.unit
class TestQuoteStoreLoading:
    """Test cases for loading quotes from a resource file"""

    def test_from_file_skips_blank_lines(self, quotes_file, sample_quotes):
        """Test loading quotes and dropping blank lines"""
        store = QuoteStore.from_file(quotes_file)

        assert list(store.quotes) == sample_quotes

    def test_from_file_strips_line_endings(self, temp_dir):
        """Test that CRLF line endings and padding are stripped"""
        path = temp_dir / "quotes.txt"
        path.write_bytes(b"  first quote \r\nsecond quote\r\n")

        store = QuoteStore.from_file(path)

        assert list(store.quotes) == ["first quote", "second quote"]

    def test_from_file_missing(self, temp_dir):
        """Test loading from a missing resource"""
        with pytest.raises(QuoteStoreError) as exc_info:
            QuoteStore.from_file(temp_dir / "missing.txt")

        assert exc_info.value.error_code == ErrorCodes.QUOTES_NOT_FOUND
        assert "missing.txt" in exc_info.value.context["path"]

    def test_from_file_only_blank_lines(self, temp_dir):
        """Test that a resource without quotes fails fast"""
        path = temp_dir / "quotes.txt"
        path.write_text("\n\n   \n", encoding="utf-8")

        with pytest.raises(QuoteStoreError):
            QuoteStore.from_file(path)

    def test_bundled_quotes_resource(self):
        """Test that the bundled quote list loads"""
        from utils.path_utils import RESOURCES_DIR

        store = QuoteStore.from_file(RESOURCES_DIR / "quotes.txt")
        assert store.size() > 0

"""
Unit tests for sampling module.
"""
import threading

import pytest

from mcbox.sampling import RandomSource, SynchronizedRandomSource, UniformRandomSource


class TestUniformRandomSource:
    """Tests for UniformRandomSource."""

    def test_range(self) -> None:
        """Draws lie in [low, high)."""
        source = UniformRandomSource(seed=0)
        values = [source.draw(-2.0, 3.0) for _ in range(1000)]
        assert min(values) >= -2.0
        assert max(values) < 3.0

    def test_seed_reproducible(self) -> None:
        """Equal seeds give equal streams."""
        a = UniformRandomSource(seed=5)
        b = UniformRandomSource(seed=5)
        assert [a.draw(0, 1) for _ in range(10)] == [b.draw(0, 1) for _ in range(10)]

    def test_degenerate_range(self) -> None:
        """low == high returns low."""
        assert UniformRandomSource(seed=1).draw(0.0, 0.0) == 0.0

    def test_inverted_range(self) -> None:
        """high < low raises ValueError."""
        with pytest.raises(ValueError, match="must be >="):
            UniformRandomSource(seed=1).draw(1.0, 0.0)

    def test_returns_float(self) -> None:
        """Draws are plain Python floats."""
        assert type(UniformRandomSource(seed=1).draw(0, 1)) is float

    def test_is_random_source(self, scripted_source) -> None:
        """Stock and duck-typed sources satisfy the protocol."""
        assert isinstance(UniformRandomSource(), RandomSource)
        assert isinstance(scripted_source([]), RandomSource)


class TestSynchronizedRandomSource:
    """Tests for SynchronizedRandomSource."""

    def test_delegates(self, scripted_source) -> None:
        """Draws are passed through unchanged."""
        inner = scripted_source([0.25])
        source = SynchronizedRandomSource(inner)
        assert source.draw(0, 1) == 0.25
        assert inner.calls == [(0, 1)]

    def test_lock_is_reentrant(self) -> None:
        """Holding the lock does not block draws from the same thread."""
        source = SynchronizedRandomSource(UniformRandomSource(seed=2))
        with source.lock:
            value = source.draw(0, 1)
        assert 0 <= value < 1

    def test_thread_safe_stream(self) -> None:
        """Concurrent draws consume the stream exactly once each."""
        reference = UniformRandomSource(seed=3)
        expected = sorted(reference.draw(0, 1) for _ in range(400))
        source = SynchronizedRandomSource(UniformRandomSource(seed=3))
        results = []
        results_lock = threading.Lock()

        def worker():
            drawn = [source.draw(0, 1) for _ in range(100)]
            with results_lock:
                results.extend(drawn)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(results) == expected

"""
Tests for Concurrent Query Aggregation

gather_named() runs blocking callables in the thread pool and joins their
results by name.
"""

import threading
import time

import pytest

from catalog.services.aggregate import gather_named


class TestGatherNamed:
    """Tests for gather_named()."""

    @pytest.mark.asyncio
    async def test_results_keyed_by_name(self):
        results = await gather_named({
            "a": lambda: 1,
            "b": lambda: "two",
            "c": lambda: [3],
        })

        assert results == {"a": 1, "b": "two", "c": [3]}

    @pytest.mark.asyncio
    async def test_empty_mapping(self):
        assert await gather_named({}) == {}

    @pytest.mark.asyncio
    async def test_operations_run_concurrently(self):
        """Two operations that wait for each other only finish if both run at once."""
        barrier = threading.Barrier(2, timeout=5)

        def meet():
            barrier.wait()
            return True

        results = await gather_named({"first": meet, "second": meet})

        assert results == {"first": True, "second": True}

    @pytest.mark.asyncio
    async def test_first_error_propagates(self):
        def fail():
            raise ValueError("query failed")

        def slow():
            time.sleep(0.05)
            return "late"

        with pytest.raises(ValueError, match="query failed"):
            await gather_named({"ok": slow, "bad": fail})

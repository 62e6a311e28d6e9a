"""
Tests for ResultCache, the per-calculator memo.
"""

from comparemeans.core.result import ResultCache


class TestGetOrCompute:

    def test_computes_once(self):
        cache = ResultCache()
        calls = []

        def compute():
            calls.append(1)
            return {'value': 42}

        first = cache.get_or_compute('table', compute)
        second = cache.get_or_compute('table', compute)
        assert first is second
        assert len(calls) == 1

    def test_keys_are_independent(self):
        cache = ResultCache()
        a = cache.get_or_compute('a', lambda: [1])
        b = cache.get_or_compute('b', lambda: [2])
        assert a == [1]
        assert b == [2]
        assert cache.keys() == frozenset({'a', 'b'})

    def test_none_is_cached(self):
        cache = ResultCache()
        calls = []

        def compute():
            calls.append(1)
            return None

        cache.get_or_compute('missing', compute)
        cache.get_or_compute('missing', compute)
        assert len(calls) == 1


class TestMembership:

    def test_contains(self):
        cache = ResultCache()
        assert 'x' not in cache
        cache.get_or_compute('x', lambda: 1)
        assert 'x' in cache

    def test_fresh_caches_do_not_share_entries(self):
        first, second = ResultCache(), ResultCache()
        first.get_or_compute('x', lambda: 1)
        assert 'x' not in second

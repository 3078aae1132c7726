from apps.core.query_cache import QueryCache


class Counter:
    def __init__(self, value='result'):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


def test_fetch_reuses_a_fresh_result():
    query_cache = QueryCache()
    fetch = Counter()

    assert query_cache.fetch(('car', 5), fetch) == 'result'
    assert query_cache.fetch(('car', 5), fetch) == 'result'
    assert fetch.calls == 1


def test_keys_differ_by_their_parts():
    query_cache = QueryCache()
    first, second = Counter('first'), Counter('second')

    assert query_cache.fetch(('car', 1), first) == 'first'
    assert query_cache.fetch(('car', 2), second) == 'second'
    assert query_cache.make_key(('cars', None)) != query_cache.make_key(('cars', 1))


def test_empty_results_are_cached_too():
    query_cache = QueryCache()
    fetch = Counter(value=[])

    query_cache.fetch(('cars', None), fetch)
    query_cache.fetch(('cars', None), fetch)
    assert fetch.calls == 1


def test_invalidate_forces_a_refetch_for_the_prefix_only():
    query_cache = QueryCache()
    car, city = Counter(), Counter()

    query_cache.fetch(('car', 5), car)
    query_cache.fetch(('city', 1), city)
    query_cache.invalidate('car')
    query_cache.fetch(('car', 5), car)
    query_cache.fetch(('city', 1), city)

    assert car.calls == 2
    assert city.calls == 1


def test_invalidating_an_unknown_prefix_is_harmless():
    query_cache = QueryCache()
    query_cache.invalidate('never-used')
    fetch = Counter()
    query_cache.fetch(('never-used', 1), fetch)
    query_cache.fetch(('never-used', 1), fetch)
    assert fetch.calls == 1


def test_zero_timeout_disables_caching():
    query_cache = QueryCache(timeout=0)
    fetch = Counter()
    query_cache.fetch(('car', 1), fetch)
    query_cache.fetch(('car', 1), fetch)
    assert fetch.calls == 2

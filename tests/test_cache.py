from vidinfo.core.cache import InfoCache


def test_get_set():
    cache = InfoCache()
    assert cache.get("missing") is None
    cache.set(("a", 1), "value")
    assert cache.get(("a", 1)) == "value"
    assert ("a", 1) in cache


def test_least_recently_used_evicted():
    cache = InfoCache(maxsize=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)

    assert "b" not in cache
    assert cache.get("a") == 1
    assert cache.get("c") == 3
    assert len(cache) == 2


def test_unbounded_and_clear():
    cache = InfoCache(maxsize=None)
    for i in range(500):
        cache.set(i, i)
    assert len(cache) == 500
    cache.clear()
    assert len(cache) == 0

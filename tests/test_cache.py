from packcalc.cache import PackCache, cache_key
from packcalc.calculator import Packing

RESULT = [Packing(box_size=53, quantity=2), Packing(box_size=23, quantity=1)]


def test_cache_key_format():
    assert cache_key(10, [53, 23, 31]) == "10::23:31:53"


def test_cache_key_ignores_pack_order():
    assert cache_key(10, [1, 2, 3]) == cache_key(10, [3, 1, 2])


def test_set_then_get_returns_result():
    cache = PackCache(16)
    cache.set(129, [23, 53], RESULT)
    assert cache.get(129, 23, 53) == RESULT


def test_get_with_reordered_packs_hits():
    cache = PackCache(16)
    cache.set(129, [53, 23], RESULT)
    assert cache.get(129, 23, 53) == RESULT


def test_miss_returns_none():
    cache = PackCache(16)
    cache.set(129, [23, 53], RESULT)
    assert cache.get(130, 23, 53) is None


def test_invalid_get_returns_none():
    cache = PackCache(16)
    cache.set(129, [23, 53], RESULT)
    assert cache.get(0, 23, 53) is None
    assert cache.get(129) is None


def test_invalid_set_is_ignored():
    cache = PackCache(16)
    cache.set(-5, [23, 53], RESULT)
    cache.set(129, [], RESULT)
    assert cache.get(-5, 23, 53) is None
    assert cache.get(129, 23, 53) is None


def test_stored_result_is_not_affected_by_later_mutation():
    cache = PackCache(16)
    result = list(RESULT)
    cache.set(129, [23, 53], result)
    result.clear()
    assert cache.get(129, 23, 53) == RESULT


def test_set_does_not_reorder_callers_packs():
    cache = PackCache(16)
    packs = [53, 23]
    cache.set(129, packs, RESULT)
    assert packs == [53, 23]


def test_capacity_is_bounded():
    cache = PackCache(1)
    cache.set(1, [5], [Packing(box_size=5, quantity=1)])
    cache.set(2, [5], [Packing(box_size=5, quantity=1)])
    hits = [cache.get(1, 5), cache.get(2, 5)]
    assert sum(hit is not None for hit in hits) == 1
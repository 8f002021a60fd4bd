import pytest

from noise_engine import Add, Cache, Fbm


def test_cache_is_transparent(points_2d) -> None:
    source = Fbm(seed=6, octaves=3)
    cache = Cache(source)
    for point in points_2d:
        assert cache.get(point) == source.get(point)


def test_repeated_point_hits_the_cache(counting_source) -> None:
    cache = Cache(counting_source)
    first = cache.get((1.0, 2.0))
    second = cache.get([1.0, 2.0])
    assert first == second == 3.0
    assert counting_source.calls == 1


def test_new_point_replaces_the_slot(counting_source) -> None:
    cache = Cache(counting_source)
    cache.get((1.0, 2.0))
    cache.get((1.0, 2.5))
    cache.get((1.0, 2.0))
    assert counting_source.calls == 3


def test_different_length_point_is_a_miss(counting_source) -> None:
    cache = Cache(counting_source)
    cache.get((1.0, 2.0))
    assert cache.get((1.0, 2.0, 0.0)) == 3.0
    assert counting_source.calls == 2


def test_shared_subtree_is_evaluated_once(counting_source) -> None:
    cache = Cache(counting_source)
    node = Add(cache, cache)
    assert node.get((2.0, 2.0)) == pytest.approx(8.0)
    assert counting_source.calls == 1


def test_clear_forgets_the_slot(counting_source) -> None:
    cache = Cache(counting_source)
    cache.get((0.5, 0.5))
    cache.clear()
    cache.get((0.5, 0.5))
    assert counting_source.calls == 2

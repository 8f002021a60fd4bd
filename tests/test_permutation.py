import logging

import numpy as np
import pytest

from noise_engine import ConfigurationError, SeedTable
from noise_engine.noise import hash2, hash3, hash4, hash_cell


def test_table_is_a_doubled_permutation() -> None:
    table = SeedTable(7).table
    assert table.shape == (512,)
    assert sorted(table[:256].tolist()) == list(range(256))
    assert np.array_equal(table[:256], table[256:])


def test_same_seed_same_table() -> None:
    assert np.array_equal(SeedTable(99).table, SeedTable(99).table)
    assert SeedTable(99) == SeedTable(99)


def test_different_seeds_differ() -> None:
    assert not np.array_equal(SeedTable(1).table, SeedTable(2).table)


def test_table_is_read_only() -> None:
    with pytest.raises(ValueError):
        SeedTable(0).table[0] = 5


@pytest.mark.parametrize("seed", [-1, 2 ** 32, 1.5, "3", True])
def test_rejects_bad_seeds(seed) -> None:
    with pytest.raises(ConfigurationError):
        SeedTable(seed)


def test_hash_matches_compiled_fold() -> None:
    seed_table = SeedTable(2024)
    p = seed_table.table
    for coords in [(0, 0), (-3, 17), (255, 256), (-1000, 4)]:
        assert seed_table.hash(*coords) == hash2(p, *coords)
        assert seed_table.hash(*coords, 5) == hash3(p, *coords, 5)
        assert seed_table.hash(*coords, 5, -9) == hash4(p, *coords, 5, -9)
        assert seed_table.hash(*coords) == hash_cell(p, np.array(coords, dtype=np.int64))


def test_hash_stays_in_byte_range() -> None:
    seed_table = SeedTable(3)
    values = {seed_table.hash(x, y) for x in range(-20, 20) for y in range(-20, 20)}
    assert min(values) >= 0
    assert max(values) <= 255


def test_table_generation_is_logged(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="noise_engine"):
        SeedTable(314)
    assert "seed 314" in caplog.text

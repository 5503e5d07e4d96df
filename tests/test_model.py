import numpy as np
import pytest

from asciiart.errors import DegenerateNormalizationError, EmptyWorkingSetError
from asciiart.model import CharBrightnessIndex, normalize
from tests.conftest import CountingRasterizer

DIGITS = "0123456789"


def make_index(chars=DIGITS, counts=None):
    return CharBrightnessIndex(chars, CountingRasterizer(counts))


def test_raw_brightness_is_lit_fraction():
    index = make_index(counts={"#": 64})
    assert index.raw_brightness("#") == pytest.approx(0.25)
    assert index.raw_brightness("0") == pytest.approx(48 / 256)


def test_normalized_extremes():
    index = make_index()
    normalized = {entry.char: entry.normalized_brightness for entry in index.entries()}
    assert normalized["0"] == 0.0
    assert normalized["9"] == 1.0
    assert normalized["5"] == pytest.approx(5 / 9)


def test_nearest_exact_and_beyond_extremes():
    index = make_index()
    assert index.nearest(0.0) == "0"
    assert index.nearest(1.0) == "9"
    assert index.nearest(-3.0) == "0"
    assert index.nearest(3.0) == "9"
    assert index.nearest(5 / 9) == "5"


def test_nearest_picks_closer_side():
    index = make_index("ab", counts={"a": 0, "b": 100})
    assert index.nearest(0.4) == "a"
    assert index.nearest(0.6) == "b"


def test_distance_tie_prefers_smaller_character():
    assert make_index("xb", counts={"x": 0, "b": 256}).nearest(0.5) == "b"
    assert make_index("bx", counts={"b": 0, "x": 256}).nearest(0.5) == "b"


def test_bucket_returns_smallest_character():
    index = make_index("zba", counts={"z": 10, "b": 10, "a": 30})
    assert index.nearest(0.0) == "b"
    assert index.normalized_map() == {0.0: frozenset("bz"), 1.0: frozenset("a")}


def test_normalize():
    assert normalize(5.0, 0.0, 10.0) == 0.5
    with pytest.raises(DegenerateNormalizationError):
        normalize(3.0, 3.0, 3.0)


def test_degenerate_normalization_is_a_zero_division():
    with pytest.raises(ZeroDivisionError):
        normalize(1.0, 1.0, 1.0)


def test_single_character_normalizes_to_zero():
    index = make_index("A")
    assert index.normalized_map() == {0.0: frozenset("A")}
    assert index.nearest(0.0) == "A"
    assert index.nearest(0.9) == "A"


def test_equal_raw_values_share_zero_bucket():
    index = make_index("ab", counts={"a": 7, "b": 7})
    assert index.normalized_map() == {0.0: frozenset("ab")}
    assert index.nearest(1.0) == "a"


def test_empty_index_rejects_lookup():
    index = make_index("")
    assert len(index) == 0
    with pytest.raises(EmptyWorkingSetError):
        index.nearest(0.5)


def test_add_renormalizes_everyone():
    index = make_index()
    before = dict((e.char, e.normalized_brightness) for e in index.entries())
    index.add_char("@")  # ord 64, new maximum
    after = dict((e.char, e.normalized_brightness) for e in index.entries())
    assert after["@"] == 1.0
    assert after["9"] < before["9"]
    assert after["0"] == 0.0


def test_add_then_remove_restores_maps():
    index = make_index()
    raw_before = index.raw_map()
    normalized_before = index.normalized_map()

    index.add_char("@")
    index.remove_char("@")

    assert index.raw_map() == raw_before
    after = index.normalized_map()
    assert len(after) == len(normalized_before)
    for (k1, v1), (k2, v2) in zip(sorted(normalized_before.items()), sorted(after.items())):
        assert k1 == pytest.approx(k2)
        assert v1 == v2


def test_add_existing_character_is_idempotent():
    index = make_index()
    raw_before = index.raw_map()
    index.add_char("3")
    assert len(index) == 10
    assert index.raw_map() == raw_before


def test_remove_missing_character_is_noop():
    index = make_index()
    raw_before = index.raw_map()
    index.remove_char("Q")
    assert index.raw_map() == raw_before
    assert len(index) == 10


def test_remove_drops_empty_bucket():
    index = make_index("abc", counts={"a": 1, "b": 1, "c": 9})
    index.remove_char("a")
    assert index.raw_map() == {1 / 256: frozenset("b"), 9 / 256: frozenset("c")}
    index.remove_char("b")
    assert index.raw_map() == {9 / 256: frozenset("c")}
    assert index.nearest(0.0) == "c"


def test_remove_every_character_empties_index():
    index = make_index()
    index.remove_chars(DIGITS)
    assert index.chars == []
    with pytest.raises(EmptyWorkingSetError):
        index.nearest(0.0)


def test_nearest_is_monotonic():
    index = make_index(DIGITS + "@#&.", counts={".": 3, "&": 120, "#": 120})
    normalized = {e.char: e.normalized_brightness for e in index.entries()}
    results = [normalized[index.nearest(b)] for b in np.linspace(0.001, 0.999, 500)]
    assert results == sorted(results)


def test_raw_brightness_is_rendered_once():
    rasterizer = CountingRasterizer()
    index = CharBrightnessIndex(DIGITS, rasterizer)
    index.remove_char("5")
    index.add_char("5")
    assert rasterizer.calls.count("5") == 1


def test_add_chars_rejects_strings_without_changing_set():
    index = make_index()
    with pytest.raises(ValueError):
        index.add_chars(["a", "bc"])
    assert "a" not in index
    assert index.chars == list(DIGITS)


def test_entries_in_brightness_order():
    index = make_index("ca", counts={"c": 5, "a": 200})
    entries = list(index.entries())
    assert [e.char for e in entries] == ["c", "a"]
    assert entries[1].raw_brightness == pytest.approx(200 / 256)

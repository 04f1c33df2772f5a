"""
collab_atlas/tests/test_noise.py — Tests for the deterministic noise and hashing helpers.

Tests verify:
- noise() stays in [0, 1) and is a pure function of its seed.
- hash_string() matches the signed 32-bit rolling hash (known values, overflow).
- seed_from_text() weights code units by position, counting surrogate pairs.
- noise() reference values for fixed seeds.
- slugify() collapses exactly the JavaScript whitespace set.
- slugify(), clamp(), to_fixed() and percent() edge cases.
"""

import pytest

from collab_atlas.formatting import percent, to_fixed
from collab_atlas.noise import clamp, hash_string, noise, seed_from_text, slugify


# ── noise ─────────────────────────────────────────────────────────────────────

def test_noise_of_zero_is_zero():
    assert noise(0) == 0.0


@pytest.mark.parametrize("seed", [1, 7, 42, 293, 9999, 123456, -17, 0.5])
def test_noise_in_unit_interval(seed):
    value = noise(seed)
    assert 0.0 <= value < 1.0


def test_noise_is_deterministic():
    assert noise(1234) == noise(1234)


def test_noise_spreads_over_interval():
    """Consecutive seeds should not collapse to a narrow band."""
    values = [noise(seed) for seed in range(1, 501)]
    assert min(values) < 0.1
    assert max(values) > 0.9
    assert 0.4 < sum(values) / len(values) < 0.6


# ── hash_string ───────────────────────────────────────────────────────────────

def test_hash_empty_string():
    assert hash_string("") == 0


def test_hash_single_character():
    assert hash_string("a") == 97


def test_hash_two_characters():
    assert hash_string("ab") == 97 * 31 + 98


def test_hash_matches_known_32bit_values():
    """Same recurrence as Java's String.hashCode, then abs()."""
    assert hash_string("hello") == 99162322
    assert hash_string("Hello World") == 862545276


def test_hash_int32_minimum_becomes_positive():
    """'polygenelubricants' hashes to exactly −2**31 before abs()."""
    assert hash_string("polygenelubricants") == 2 ** 31


def test_hash_long_strings_stay_non_negative():
    for text in ["x" * 500, "team-42|repo-7|" * 40, "Ünïcödé naïve café"]:
        h = hash_string(text)
        assert 0 <= h <= 2 ** 31


# ── seed_from_text ────────────────────────────────────────────────────────────

def test_seed_from_text_empty():
    assert seed_from_text("") == 0


def test_seed_from_text_weights_by_position():
    assert seed_from_text("ab") == 97 * 1 + 98 * 2
    assert seed_from_text("ba") == 98 * 1 + 97 * 2


def test_seed_from_text_counts_surrogate_pairs():
    """An astral character contributes two UTF-16 code units."""
    assert seed_from_text("😀") == 0xD83D * 1 + 0xDE00 * 2


# ── slugify / clamp ───────────────────────────────────────────────────────────

def test_slugify_lowercases_and_collapses_whitespace():
    assert slugify("Ada  Lovelace") == "ada-lovelace"
    assert slugify("Grace\tM. Hopper") == "grace-m.-hopper"


def test_slugify_keeps_edge_whitespace_as_dashes():
    assert slugify(" Ada ") == "-ada-"


def test_clamp():
    assert clamp(-1.0, 0.0, 1.0) == 0.0
    assert clamp(2.0, 0.0, 1.0) == 1.0
    assert clamp(0.25, 0.0, 1.0) == 0.25


# ── Number formatting ─────────────────────────────────────────────────────────

def test_to_fixed_pads_decimals():
    assert to_fixed(0.7) == "0.70"
    assert to_fixed(1) == "1.00"


def test_to_fixed_rounds_ties_away_from_zero():
    assert to_fixed(0.125) == "0.13"
    assert to_fixed(2.5, 0) == "3"


def test_to_fixed_uses_exact_binary_value():
    """1.005 is stored just below 1.005, so it rounds down."""
    assert to_fixed(1.005) == "1.00"


def test_percent():
    assert percent(0.5) == "50%"
    assert percent(2 / 3) == "67%"
    assert percent(0.0) == "0%"


# ── Reference values ──────────────────────────────────────────────────────────
# frac(sin(k × 9999) × 10000); platform sin() may differ in the last bits.

@pytest.mark.parametrize(
    "seed, expected",
    [
        (1, 0.86956396233563282),
        (2, 0.68496211300771392),
        (3, 0.0090530394190864172),
        (293, 0.25627667960270628),
    ],
)
def test_noise_reference_values(seed, expected):
    assert noise(seed) == pytest.approx(expected, abs=1e-9)


# ── JavaScript whitespace in ids ──────────────────────────────────────────────

@pytest.mark.parametrize("separator", ["\u00a0", "\u2003", "\u3000", "\ufeff", "\v", "\r\n"])
def test_slugify_collapses_javascript_whitespace(separator):
    assert slugify(f"Ada{separator}Lovelace") == "ada-lovelace"


@pytest.mark.parametrize("separator", ["\x1c", "\x1d", "\x1e", "\x1f", "\u200b"])
def test_slugify_keeps_characters_javascript_does_not_treat_as_space(separator):
    assert slugify(f"Ada{separator}Lovelace") == f"ada{separator}lovelace"

"""
collab_atlas/noise.py — Deterministic noise source and string hashing.

Every synthetic value in Collab Atlas is a pure function of a seed, and every
seed is a pure function of a string. The dashboard regenerates its data on
each render, so the seeds must be the ones the browser derives: string hashes
and seed sums run over UTF-16 code units (what JavaScript's charCodeAt
returns) and are bit-exact with the browser.

noise() is the same formula as the browser's but goes through the platform's
C library sin(). V8 ships its own fdlibm port, and for arguments as large as
seed × 9999 the two can disagree in the last bits, which the × 10000 step
amplifies to around 1e-12. Generated values therefore match the dashboard to
about 12 decimal places, not bit for bit. Within one platform they are
reproducible exactly.
"""

import math
import re
import struct

_INT32_SPAN = 1 << 32
_INT32_HALF = 1 << 31

# JavaScript's \s: ECMAScript WhiteSpace plus LineTerminator. Python's \s also
# matches \x1c-\x1f and misses U+FEFF.
_WHITESPACE_RE = re.compile(
    r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)


def _code_units(text: str) -> tuple[int, ...]:
    """UTF-16 code units of text (astral characters become surrogate pairs)."""
    encoded = text.encode("utf-16-le", "surrogatepass")
    return struct.unpack(f"<{len(encoded) // 2}H", encoded)


def noise(seed: float) -> float:
    """
    Deterministic pseudo-random value in [0, 1) for a numeric seed.

    noise(seed) = frac(sin(seed × 9999) × 10000)
    """
    value = math.sin(seed * 9999) * 10000
    return value - math.floor(value)


def hash_string(text: str) -> int:
    """
    Rolling polynomial string hash: h = h × 31 + code_unit, wrapped to a
    signed 32-bit integer after every step, absolute value at the end.

    Bit-compatible with the dashboard's `((h << 5) - h) + c; h &= h`.
    """
    h = 0
    for unit in _code_units(text):
        h = (h * 31 + unit + _INT32_HALF) % _INT32_SPAN - _INT32_HALF
    return abs(h)


def seed_from_text(text: str) -> int:
    """Position-weighted code-unit sum: Σ code_unit(i) × (i + 1)."""
    return sum(unit * (index + 1) for index, unit in enumerate(_code_units(text)))


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def slugify(name: str) -> str:
    """Participant id: lowercase, whitespace runs collapsed to '-'."""
    return _WHITESPACE_RE.sub("-", name.lower())

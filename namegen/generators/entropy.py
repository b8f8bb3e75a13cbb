#!/usr/bin/env python3
"""
Entropy Module for Name Generation
===================================
Provides the deterministic bit generator that drives every random choice
made by the pattern interpreter, plus a helper for picking a fresh seed.

Features:
- 32-bit xorshift generator (shifts 13, 17, 5) with caller-owned state
- Cheap reservoir replacement test and modulo ordinal draws
- Hardware/time/pid entropy mixing for seeding interactive runs

The generator never reseeds itself. Two instances built from the same
seed produce the same sequence forever, which is what makes a name
reproducible from its pattern and seed.
"""

import os
import time
import hashlib


UINT32_MAX = 0xFFFFFFFF


# =============================================================================
# Xorshift Generator
# =============================================================================

class Xorshift32:
    """
    32-bit xorshift generator with mutable, caller-owned state.

    The instance is the "seed passed by reference": every draw advances
    ``state`` in place, so a caller can continue a sequence across calls
    or ``copy()`` it to replay one.

    Only the low 32 bits of the seed are kept. Zero is rejected because it
    is a fixed point of the transform.
    """

    __slots__ = ('state',)

    def __init__(self, seed: int):
        state = int(seed) & UINT32_MAX
        if state == 0:
            raise ValueError("seed must have nonzero low 32 bits")
        self.state = state

    def next_u32(self) -> int:
        """Advance the state and return it as the next 32-bit draw."""
        x = self.state
        x ^= x << 13
        x ^= (x & UINT32_MAX) >> 17
        x ^= x << 5
        self.state = x & UINT32_MAX
        return self.state

    def accepts(self, n: int) -> bool:
        """
        Reservoir replacement test for the n-th candidate.

        Accepts with probability close to 1/n. The threshold uses integer
        division, so the bias is bounded by n / 2**32.
        """
        return self.next_u32() < UINT32_MAX // n

    def below(self, count: int) -> int:
        """Draw an ordinal in [0, count) by modulo reduction."""
        return self.next_u32() % count

    def copy(self) -> 'Xorshift32':
        """Return an independent generator at the same position."""
        return Xorshift32(self.state)

    def __eq__(self, other):
        if not isinstance(other, Xorshift32):
            return NotImplemented
        return self.state == other.state

    def __hash__(self):
        return hash(self.state)

    def __repr__(self):
        return f"Xorshift32(0x{self.state:08x})"


def as_rng(seed) -> Xorshift32:
    """Wrap an int seed, or pass an existing generator through unchanged."""
    if isinstance(seed, Xorshift32):
        return seed
    return Xorshift32(seed)


# =============================================================================
# Fresh Seeds
# =============================================================================

def fresh_seed() -> int:
    """
    Produce a nonzero 32-bit seed from several entropy sources.

    Combines:
    - os.urandom() - system entropy pool
    - High-resolution time (nanoseconds)
    - Process ID (shifted to high bits)
    - Memory address of a new object
    """
    hw_entropy = int.from_bytes(os.urandom(8), 'big')
    time_entropy = time.time_ns()
    pid_entropy = os.getpid() << 48
    mem_entropy = id(object()) & UINT32_MAX

    combined = hw_entropy ^ time_entropy ^ pid_entropy ^ mem_entropy

    # Hash for uniform distribution
    digest = hashlib.sha256(combined.to_bytes(32, 'big')).digest()
    seed = int.from_bytes(digest[:4], 'big')
    return seed or 1


__all__ = [
    'UINT32_MAX',
    'Xorshift32',
    'as_rng',
    'fresh_seed',
]

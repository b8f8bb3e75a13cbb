#!/usr/bin/env python3
"""
namegen - Pattern-Based Name Generator
======================================

Generates fantasy-style names from a compact pattern grammar. Every random
choice comes from a 32-bit xorshift generator, so a name is fully
reproducible from its pattern and seed.

Quick Start
-----------
    from namegen import NameGen

    gen = NameGen(seed=42)

    # One name from a pattern
    print(gen.name("!s<v|V>(dim)").name)

    # A batch from a preset
    for item in gen.generate("elven", count=5):
        print(item.name)

    # Strict validation
    report = gen.check("<ba")
    print(report.valid, report.error)

Pattern Grammar
---------------
    s v V c B C i m M D d   substitution markers (see `namegen classes`)
    !                       capitalize the next unit
    <a|b>                   choose one alternative, substitution on
    (a|b)                   choose one alternative, markers copied literally

Modules
-------
    namegen.generators - Bit generator, fragment dictionary, interpreter
    namegen.config     - Presets and environment overrides
    namegen.settings   - YAML application settings

CLI Usage
---------
    python -m namegen generate "!BVs" -n 10
    python -m namegen generate --preset elven --seed 42
    python -m namegen check "<ba"
    python -m namegen classes
"""

__version__ = "0.1.0"

import logging
from dataclasses import dataclass, field
from typing import List, Optional

# =============================================================================
# Submodule Imports
# =============================================================================

from . import generators
from . import config

# =============================================================================
# Generator Imports
# =============================================================================

from .generators import (
    Xorshift32,
    as_rng,
    fresh_seed,
    FragmentClass,
    FragmentDictionary,
    load_fragments,
    Outcome,
    PatternSyntaxError,
    GenerationResult,
    generate,
    validate,
    substitution_markers,
)

# =============================================================================
# Config Imports
# =============================================================================

from .config import (
    Config,
    get_config,
    load_env,
    PATTERN_PRESETS,
    get_pattern,
    list_presets,
)
from .settings import get_setting, get_int_setting, get_bool_setting, resolve_path


logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class GeneratedName:
    """A generated name with the state needed to reproduce it."""
    name: str
    pattern: str
    seed: int
    outcome: Outcome = Outcome.SUCCESS
    attempts: int = 1

    @property
    def truncated(self) -> bool:
        return self.outcome is Outcome.TRUNCATED


@dataclass
class PatternReport:
    """Result of strictly validating a pattern."""
    pattern: str
    valid: bool
    markers: List[str] = field(default_factory=list)
    error: Optional[PatternSyntaxError] = None


# =============================================================================
# NameGen Main Class
# =============================================================================

class NameGen:
    """
    Main interface for pattern-based name generation.

    Owns one xorshift generator; every call advances it, so successive
    names differ while the whole run stays reproducible from the
    starting seed.

    Attributes
    ----------
    capacity : int
        Output capacity including the terminator slot
    max_retries : int
        Retries with the advanced seed after a truncated result

    Examples
    --------
        >>> gen = NameGen(seed=42)
        >>> gen.name("vv").name
        'au'
        >>> gen.state
        2836018348
    """

    def __init__(self,
                 seed=None,
                 capacity: int = None,
                 max_retries: int = None,
                 fragments=None):
        """
        Initialize a generator.

        Parameters
        ----------
        seed : int or Xorshift32, optional
            Starting state. Defaults to NAMEGEN_SEED, else a fresh seed.
            A Xorshift32 is used (and advanced) directly.
        capacity : int, optional
            Defaults to NAMEGEN_CAPACITY, else generation.capacity.
        max_retries : int, optional
            Defaults to generation.max_retries.
        fragments : FragmentDictionary or path, optional
            Substitution classes. Defaults to NAMEGEN_FRAGMENTS, else the
            packaged dictionary.
        """
        env = get_config()

        if seed is None:
            seed = env.seed if env.has_seed else fresh_seed()
        self._rng = as_rng(seed)

        if capacity is None:
            capacity = env.capacity
        if capacity is None:
            capacity = get_int_setting('generation.capacity', 32)
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity

        if max_retries is None:
            max_retries = get_int_setting('generation.max_retries', 8)
        self.max_retries = max_retries

        if fragments is None:
            fragments = env.fragments_path
        if fragments is None:
            path = get_setting('fragments.path')
            self._fragments = load_fragments(resolve_path(path) if path else None)
        elif isinstance(fragments, FragmentDictionary):
            self._fragments = fragments
        else:
            self._fragments = load_fragments(fragments)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> int:
        """Current generator state; seed a new NameGen with it to continue."""
        return self._rng.state

    @property
    def rng(self) -> Xorshift32:
        return self._rng

    @property
    def fragments(self) -> FragmentDictionary:
        return self._fragments

    def reseed(self, seed) -> None:
        self._rng = as_rng(seed)

    def resolve(self, pattern: str) -> str:
        """Resolve a preset name to its pattern (patterns pass through)."""
        return get_pattern(pattern)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def name(self, pattern: str) -> GeneratedName:
        """
        Generate one name, retrying after truncation.

        Each retry continues from the advanced state, which usually picks
        a different (possibly shorter) expansion. After ``max_retries``
        the truncated name is returned as-is.

        Raises
        ------
        PatternSyntaxError
            If the generator reports the pattern as invalid.
        """
        pattern = self.resolve(pattern)
        attempts = 0
        while True:
            attempts += 1
            start = self._rng.state
            result = generate(pattern, self._rng, self.capacity, self._fragments)
            if result.outcome is Outcome.INVALID:
                raise result.error
            if result.outcome is Outcome.SUCCESS or attempts > self.max_retries:
                break
            logger.debug(
                "Truncated %r at capacity %d, retrying (%d/%d)",
                result.name, self.capacity, attempts, self.max_retries,
            )

        if result.outcome is Outcome.TRUNCATED:
            logger.warning(
                "Giving up after %d attempts at capacity %d; returning truncated name %r",
                attempts, self.capacity, result.name,
            )

        return GeneratedName(
            name=result.name,
            pattern=pattern,
            seed=start,
            outcome=result.outcome,
            attempts=attempts,
        )

    def generate(self,
                 pattern: str,
                 count: int = None,
                 unique: bool = None) -> List[GeneratedName]:
        """
        Generate a batch of names.

        Parameters
        ----------
        pattern : str
            Pattern or preset name. Validated strictly before generating.
        count : int, optional
            Number of names (default: generation.count)
        unique : bool, optional
            Skip case-insensitive duplicates (default: generation.unique)

        Returns
        -------
        list[GeneratedName]
            May hold fewer than ``count`` names when ``unique`` is set and
            the pattern has few distinct expansions.
        """
        pattern = self.resolve(pattern)
        validate(pattern)

        if count is None:
            count = get_int_setting('generation.count', 10)
        if unique is None:
            unique = get_bool_setting('generation.unique', True)

        budget = count
        if unique:
            budget = count * get_int_setting('generation.unique_attempts_factor', 10)

        names = []
        seen = set()
        attempts = 0
        while len(names) < count and attempts < budget:
            attempts += 1
            item = self.name(pattern)
            if unique:
                key = item.name.lower()
                if key in seen:
                    continue
                seen.add(key)
            names.append(item)

        if len(names) < count:
            logger.warning(
                "Only %d unique names for %r after %d attempts",
                len(names), pattern, attempts,
            )
        return names

    def check(self, pattern: str) -> PatternReport:
        """Strictly validate a pattern and list the markers it expands."""
        pattern = self.resolve(pattern)
        try:
            validate(pattern)
        except PatternSyntaxError as e:
            return PatternReport(pattern=pattern, valid=False, error=e)
        return PatternReport(
            pattern=pattern,
            valid=True,
            markers=substitution_markers(pattern, self._fragments),
        )


__all__ = [
    # Main class
    'NameGen',
    'GeneratedName',
    'PatternReport',
    # Submodules
    'generators',
    'config',
    # Generators
    'Xorshift32',
    'as_rng',
    'fresh_seed',
    'FragmentClass',
    'FragmentDictionary',
    'load_fragments',
    'Outcome',
    'PatternSyntaxError',
    'GenerationResult',
    'generate',
    'validate',
    'substitution_markers',
    # Config
    'Config',
    'get_config',
    'load_env',
    'PATTERN_PRESETS',
    'get_pattern',
    'list_presets',
]

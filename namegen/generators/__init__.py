#!/usr/bin/env python3
"""
Name Generators
===============
Pattern-driven name generation:
- entropy:   deterministic xorshift bit generator and seeding
- fragments: substitution classes loaded from YAML
- pattern:   the pattern interpreter
"""

from .entropy import (
    UINT32_MAX,
    Xorshift32,
    as_rng,
    fresh_seed,
)
from .fragments import (
    FragmentClass,
    FragmentDictionary,
    parse_fragments,
    load_fragments,
    DEFAULT_FRAGMENTS_PATH,
)
from .pattern import (
    Outcome,
    PatternSyntaxError,
    GenerationResult,
    generate,
    validate,
    substitution_markers,
)

__all__ = [
    # Entropy
    'UINT32_MAX',
    'Xorshift32',
    'as_rng',
    'fresh_seed',
    # Fragments
    'FragmentClass',
    'FragmentDictionary',
    'parse_fragments',
    'load_fragments',
    'DEFAULT_FRAGMENTS_PATH',
    # Pattern interpreter
    'Outcome',
    'PatternSyntaxError',
    'GenerationResult',
    'generate',
    'validate',
    'substitution_markers',
]

#!/usr/bin/env python3
"""
Configuration Management
========================
Loads seed and capacity overrides from the environment or a .env file.
Provides named pattern presets.
"""

import logging
import os
import re
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)


# =============================================================================
# Pattern Presets
# =============================================================================
# Named patterns for common name styles. Anything that is not a preset name
# is treated as a pattern by get_pattern().
#
# Markers: s syllable, v vowel, V vowel(s), c consonant, B word-initial
# consonant(s), C consonant(s), i insult, m mushy name, M mushy ending,
# D dumb consonant, d dumb syllable. (...) is literal, <...> substitutes.

PATTERN_PRESETS = {
    # Fantasy
    "fantasy": {
        "pattern": "!<s|B>V<s|C>",
        "description": "Generic fantasy names (Braeth, Tanoust)",
    },
    "elven": {
        "pattern": "!<s|v>V<l|n|r>(ia|iel|wen|ion|ar)",
        "description": "Flowing names with elvish endings",
    },
    "dwarven": {
        "pattern": "!<B|D>V<C|c>(in|ur|ak|grim|dur)",
        "description": "Short, hard names with dwarvish endings",
    },
    "orcish": {
        "pattern": "!D<d|V><C|c><'|->!Dd",
        "description": "Guttural two-part names",
    },

    # Silly
    "idiot": {
        "pattern": "!<i|Cd>D<d|i>",
        "description": "Names for a bumbling fool",
    },
    "mushy": {
        "pattern": "!m<(kins)|(ums)|>",
        "description": "Terms of endearment",
    },

    # Compound
    "titled": {
        "pattern": "!BVs( the )!i",
        "description": "A name followed by an unflattering epithet",
    },
}


def get_pattern(preset_or_pattern: str) -> str:
    """
    Resolve a preset name to its pattern.

    Args:
        preset_or_pattern: Either:
            - a preset name (e.g., "elven")
            - "preset:<name>" to require a preset
            - any other string, returned unchanged as a pattern

    Returns:
        The pattern string

    Raises:
        ValueError: If a required preset is not found
    """
    if preset_or_pattern is None:
        raise ValueError("pattern or preset name is required")

    if preset_or_pattern.startswith("preset:"):
        name = preset_or_pattern[len("preset:"):]
        preset = PATTERN_PRESETS.get(name)
        if preset is None:
            available = ', '.join(sorted(PATTERN_PRESETS.keys()))
            raise ValueError(
                f"Unknown preset '{name}'. "
                f"Available presets: {available}"
            )
        return preset["pattern"]

    preset = PATTERN_PRESETS.get(preset_or_pattern)
    if preset is not None:
        return preset["pattern"]
    return preset_or_pattern


def list_presets() -> dict:
    """List all available presets with patterns and descriptions."""
    return {
        name: {
            "pattern": p["pattern"],
            "description": p["description"],
        }
        for name, p in PATTERN_PRESETS.items()
    }


# =============================================================================
# Application Configuration
# =============================================================================

@dataclass
class Config:
    """Environment overrides for generation settings"""
    seed: Optional[int] = None
    capacity: Optional[int] = None
    fragments_path: Optional[str] = None

    @property
    def has_seed(self) -> bool:
        return self.seed is not None


# Lines look like KEY=VALUE, optionally prefixed with "export"
_ENV_LINE = re.compile(r'^(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)$')


def _env_value(raw: str) -> str:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ('"', "'"):
        return raw[1:-1]
    # Unquoted values may end in a comment
    return raw.split(' #', 1)[0].rstrip()


def load_env(env_path: Path = None) -> dict:
    """
    Read KEY=VALUE lines from a .env file (default: ./.env).

    Blank lines and ``#`` comments are skipped; ``export`` prefixes and
    matching quotes are stripped. Values are copied into os.environ
    unless the variable is already set there. Malformed lines are logged
    and ignored.
    """
    env_path = Path(env_path) if env_path is not None else Path.cwd() / '.env'
    if not env_path.exists():
        return {}

    env_vars = {}
    for lineno, line in enumerate(env_path.read_text().splitlines(), 1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        match = _ENV_LINE.match(line)
        if match is None:
            logger.warning("%s:%d: ignoring line without KEY=VALUE", env_path, lineno)
            continue
        key, value = match.group(1), _env_value(match.group(2))
        env_vars[key] = value
        os.environ.setdefault(key, value)

    return env_vars


def _parse_int(name: str, value: Optional[str]) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        # Accept 0x... seeds as printed by the CLI
        return int(value, 0)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def get_config(env_path: Path = None) -> Config:
    """Get configuration from environment."""
    env = load_env(env_path)

    def lookup(key):
        return env.get(key) or os.environ.get(key)

    return Config(
        seed=_parse_int('NAMEGEN_SEED', lookup('NAMEGEN_SEED')),
        capacity=_parse_int('NAMEGEN_CAPACITY', lookup('NAMEGEN_CAPACITY')),
        fragments_path=lookup('NAMEGEN_FRAGMENTS'),
    )

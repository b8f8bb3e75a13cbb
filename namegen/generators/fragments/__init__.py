#!/usr/bin/env python3
"""
Fragment Dictionary Loader
==========================
Loads the substitution classes used by the pattern interpreter from YAML.

Usage:
    from namegen.generators.fragments import load_fragments

    fragments = load_fragments()
    index = fragments.class_index('s')      # 0
    fragments.class_size(index)             # 115
    fragments.class_fragment(index, 3)      # 'age'

A custom dictionary is any YAML file with the same shape as
``classes.yaml``; pass its path to ``load_fragments``.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml


logger = logging.getLogger(__name__)

FRAGMENTS_DIR = Path(__file__).parent
DEFAULT_FRAGMENTS_PATH = FRAGMENTS_DIR / 'classes.yaml'

# Characters with grammar meaning can never be substitution markers.
RESERVED_MARKERS = frozenset('()<>|!')


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class FragmentClass:
    """One substitution class: its marker and the fragments it expands to."""
    marker: str
    description: str
    fragments: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.fragments)


class FragmentDictionary:
    """
    Immutable lookup from marker character to class index to fragment.

    This is the only view of the dictionary the interpreter needs:
    ``class_index`` classifies a pattern character, ``class_size`` and
    ``class_fragment`` select the fragment to emit.
    """

    def __init__(self, classes: List[FragmentClass]):
        self._classes = tuple(classes)
        self._index: Dict[str, int] = {}
        for i, cls in enumerate(self._classes):
            self._index[cls.marker] = i

    @property
    def classes(self) -> Tuple[FragmentClass, ...]:
        return self._classes

    @property
    def markers(self) -> str:
        return ''.join(cls.marker for cls in self._classes)

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, marker: str) -> bool:
        return marker in self._index

    def class_index(self, char: str) -> Optional[int]:
        """Return the class index for a pattern character, or None."""
        return self._index.get(char)

    def class_size(self, index: int) -> int:
        """Number of fragments in class ``index``."""
        return len(self._class_at(index))

    def class_fragment(self, index: int, ordinal: int) -> str:
        """Fragment number ``ordinal`` of class ``index``."""
        cls = self._class_at(index)
        if not 0 <= ordinal < len(cls.fragments):
            raise IndexError(
                f"fragment ordinal {ordinal} out of range for class "
                f"{cls.marker!r} ({len(cls.fragments)} fragments)"
            )
        return cls.fragments[ordinal]

    def get(self, marker: str) -> Optional[FragmentClass]:
        index = self._index.get(marker)
        if index is None:
            return None
        return self._classes[index]

    def _class_at(self, index: int) -> FragmentClass:
        # Indices only come from class_index(); anything else is a bug.
        if not 0 <= index < len(self._classes):
            raise IndexError(f"substitution class index {index} out of range")
        return self._classes[index]


# =============================================================================
# Loading
# =============================================================================

def parse_fragments(data: Dict, source: str = '<data>') -> FragmentDictionary:
    """
    Build a FragmentDictionary from already-parsed YAML data.

    Raises
    ------
    ValueError
        If the data is not a list of classes, a marker is invalid or
        repeated, or a class has no fragments.
    """
    if not isinstance(data, dict) or not isinstance(data.get('classes'), list):
        raise ValueError(f"{source}: expected a top-level 'classes' list")

    classes = []
    seen = set()
    for i, entry in enumerate(data['classes']):
        if not isinstance(entry, dict):
            raise ValueError(f"{source}: classes[{i}] must be a mapping")
        marker = entry.get('marker')
        if not isinstance(marker, str) or len(marker) != 1:
            raise ValueError(f"{source}: classes[{i}].marker must be a single character")
        if marker in RESERVED_MARKERS:
            raise ValueError(f"{source}: marker {marker!r} is a grammar character")
        if marker in seen:
            raise ValueError(f"{source}: duplicate marker {marker!r}")
        seen.add(marker)

        fragments = entry.get('fragments') or []
        if not isinstance(fragments, list) or not fragments:
            raise ValueError(f"{source}: class {marker!r} has no fragments")

        classes.append(FragmentClass(
            marker=marker,
            description=str(entry.get('description', '')),
            fragments=tuple(str(f) for f in fragments),
        ))

    return FragmentDictionary(classes)


@lru_cache(maxsize=8)
def _load_path(path: Path) -> FragmentDictionary:
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    fragments = parse_fragments(data, source=str(path))
    logger.debug("Loaded %d substitution classes from %s", len(fragments), path)
    return fragments


def load_fragments(path=None) -> FragmentDictionary:
    """
    Load a fragment dictionary, defaulting to the packaged classes.

    Results are cached per resolved path.
    """
    if path is None:
        path = DEFAULT_FRAGMENTS_PATH
    path = Path(path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Missing fragment dictionary: {path}")
    return _load_path(path)


__all__ = [
    'FragmentClass',
    'FragmentDictionary',
    'parse_fragments',
    'load_fragments',
    'DEFAULT_FRAGMENTS_PATH',
    'RESERVED_MARKERS',
]

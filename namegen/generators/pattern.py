#!/usr/bin/env python3
"""
Pattern Interpreter
===================
Generates a name directly from a pattern string, without compiling it.

Grammar:
    pattern     := alternative ('|' alternative)*
    alternative := unit*
    unit        := literal-char
                 | '!'              capitalize the next unit
                 | subst-char       replaced by a random fragment of its class
                 | '(' pattern ')'  literal group: subst-chars are copied verbatim
                 | '<' pattern '>'  group with substitution

Under alternation a single scan over the group picks one alternative by
reservoir sampling, and a second pass renders only that alternative. The
same happens recursively inside every nested group, so the order of random
draws follows the order in which the pattern is traversed.

Usage:
    from namegen.generators.entropy import Xorshift32
    from namegen.generators.pattern import generate, Outcome

    rng = Xorshift32(42)
    result = generate("!s<v|V>(dim)", rng, capacity=32)
    if result.outcome is Outcome.SUCCESS:
        print(result.name)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .entropy import Xorshift32, as_rng
from .fragments import FragmentDictionary, load_fragments


logger = logging.getLogger(__name__)

_OPENERS = ('(', '<')
_CLOSERS = (')', '>')
_MATCHING = {'(': ')', '<': '>'}


# =============================================================================
# Results and Errors
# =============================================================================

class Outcome(Enum):
    """Result code of a single generation."""
    SUCCESS = 0
    TRUNCATED = 1
    INVALID = 2


class PatternSyntaxError(ValueError):
    """A pattern with unbalanced, mismatched or dangling delimiters."""

    def __init__(self, message: str, position: int = None, pattern: str = None):
        super().__init__(message)
        self.message = message
        self.position = position
        self.pattern = pattern

    def __str__(self):
        if self.position is None:
            return self.message
        return f"{self.message} at position {self.position}"

    def pointer(self) -> str:
        """Return the pattern with a caret under the offending position."""
        if self.pattern is None or self.position is None:
            return str(self)
        return f"{self.pattern}\n{' ' * self.position}^"


@dataclass
class GenerationResult:
    """Outcome of one generation plus the (terminated) output."""
    outcome: Outcome
    name: str
    error: Optional[PatternSyntaxError] = None

    def __bool__(self) -> bool:
        return self.outcome is Outcome.SUCCESS


# =============================================================================
# Traversal
# =============================================================================

class _Traversal:
    """Per-call state: pattern cursor, output, remaining capacity, RNG."""

    __slots__ = ('pattern', 'pos', 'out', 'remaining', 'rng', 'fragments')

    def __init__(self, pattern: str, rng: Xorshift32, capacity: int,
                 fragments: FragmentDictionary):
        self.pattern = pattern
        self.pos = 0
        self.out: List[str] = []
        self.remaining = capacity
        self.rng = rng
        self.fragments = fragments

    @property
    def name(self) -> str:
        return ''.join(self.out)

    def random_token(self) -> Tuple[int, int]:
        """
        Pick one alternative of the group starting at the cursor.

        Returns the ``[begin, end)`` span of the chosen alternative and
        leaves the cursor on the character that ended the group (a closer
        or the end of the pattern). The k-th alternative replaces the
        current pick with probability 1/k, so after the whole group every
        alternative has been chosen with probability 1/n.
        """
        pattern = self.pattern
        length = len(pattern)
        nest = 0
        n = 0
        token_start = self.pos
        begin = end = self.pos

        while True:
            c = pattern[self.pos] if self.pos < length else None
            if nest:
                if c is None:
                    raise PatternSyntaxError("unterminated group", self.pos, pattern)
                if c in _OPENERS:
                    nest += 1
                elif c in _CLOSERS:
                    nest -= 1
            elif c is None or c in _CLOSERS or c == '|':
                n += 1
                # The first alternative is taken without a draw.
                if n == 1 or self.rng.accepts(n):
                    begin, end = token_start, self.pos
                if c != '|':
                    return begin, end
                token_start = self.pos + 1
            elif c in _OPENERS:
                nest += 1
            self.pos += 1

    def render(self, literal: bool) -> Outcome:
        """Choose an alternative of the current group and write it out."""
        begin, end = self.random_token()
        pattern = self.pattern
        out = self.out
        capitalize = False

        i = begin
        while self.remaining and i < end:
            c = pattern[i]
            mark = len(out)
            nested = None

            if c in _OPENERS:
                save = self.pos
                self.pos = i + 1
                nested = self.render(literal=(c == '('))
                i = self.pos
                self.pos = save
                if nested is Outcome.SUCCESS:
                    closer = pattern[i] if i < len(pattern) else None
                    if closer != _MATCHING[c]:
                        raise PatternSyntaxError(
                            f"expected {_MATCHING[c]!r} to close {c!r}", i, pattern
                        )

            elif c == '!':
                capitalize = True

            else:
                index = None if literal else self.fragments.class_index(c)
                if index is None:
                    out.append(c)
                    self.remaining -= 1
                else:
                    ordinal = self.rng.below(self.fragments.class_size(index))
                    for ch in self.fragments.class_fragment(index, ordinal):
                        if not self.remaining:
                            break
                        out.append(ch)
                        self.remaining -= 1

            if capitalize and len(out) != mark:
                capitalize = False
                first = out[mark]
                if 'a' <= first <= 'z':
                    out[mark] = first.upper()

            if nested is Outcome.TRUNCATED:
                # Already terminated by the nested group
                return nested

            i += 1

        if not self.remaining:
            # The last slot belongs to the terminator.
            if out:
                out.pop()
            return Outcome.TRUNCATED
        return Outcome.SUCCESS


# =============================================================================
# Public API
# =============================================================================

def generate(pattern: str, rng, capacity: int,
             fragments: FragmentDictionary = None) -> GenerationResult:
    """
    Generate one name from ``pattern``.

    Parameters
    ----------
    pattern : str
        Pattern in the grammar described in this module.
    rng : Xorshift32 or int
        Generator state. A ``Xorshift32`` is advanced in place, so passing
        the same object again continues the sequence. A plain int seeds a
        private generator.
    capacity : int
        Output capacity including the terminator slot; names are at most
        ``capacity - 1`` characters long.
    fragments : FragmentDictionary, optional
        Substitution classes. Defaults to the packaged dictionary.

    Returns
    -------
    GenerationResult
        SUCCESS, TRUNCATED (capacity ran out; ``name`` is the prefix that
        fit) or INVALID (``error`` holds the PatternSyntaxError).
    """
    if capacity < 0:
        raise ValueError(f"capacity must be >= 0, got {capacity}")
    if fragments is None:
        fragments = load_fragments()

    traversal = _Traversal(pattern, as_rng(rng), capacity, fragments)
    try:
        outcome = traversal.render(literal=False)
        if traversal.pos != len(pattern):
            raise PatternSyntaxError(
                f"unmatched {pattern[traversal.pos]!r}", traversal.pos, pattern
            )
    except PatternSyntaxError as e:
        logger.debug("Invalid pattern %r: %s", pattern, e)
        return GenerationResult(Outcome.INVALID, traversal.name, e)

    return GenerationResult(outcome, traversal.name)


def validate(pattern: str) -> None:
    """
    Check every alternative of ``pattern`` for balanced delimiters.

    ``generate`` only checks the alternatives it happens to choose; this
    walks the whole pattern and consumes no randomness.

    Raises
    ------
    PatternSyntaxError
        On a dangling closer, a closer of the wrong kind, or an
        unterminated group (reported at its opening delimiter).
    """
    stack = []
    for pos, c in enumerate(pattern):
        if c in _OPENERS:
            stack.append((c, pos))
        elif c in _CLOSERS:
            if not stack:
                raise PatternSyntaxError(f"unmatched {c!r}", pos, pattern)
            opener, opened_at = stack.pop()
            if c != _MATCHING[opener]:
                raise PatternSyntaxError(
                    f"{c!r} does not close {opener!r} opened at position {opened_at}",
                    pos, pattern,
                )
    if stack:
        opener, opened_at = stack[-1]
        raise PatternSyntaxError(f"unterminated {opener!r}", opened_at, pattern)


def substitution_markers(pattern: str, fragments: FragmentDictionary = None) -> List[str]:
    """
    List the substitution markers a pattern can expand, in order of first use.

    Literal mode is decided by the innermost enclosing group, as in
    ``generate``: a ``<...>`` inside ``(...)`` expands again.
    """
    if fragments is None:
        fragments = load_fragments()
    modes = [False]
    found = []
    for c in pattern:
        if c in _OPENERS:
            modes.append(c == '(')
        elif c in _CLOSERS:
            if len(modes) > 1:
                modes.pop()
        elif not modes[-1] and c in fragments and c not in found:
            found.append(c)
    return found


__all__ = [
    'Outcome',
    'PatternSyntaxError',
    'GenerationResult',
    'generate',
    'validate',
    'substitution_markers',
]

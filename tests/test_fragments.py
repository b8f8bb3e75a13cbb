"""
Tests for the Fragment Dictionary
=================================
Tests for loading and indexing substitution classes in
namegen/generators/fragments/.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namegen.generators.fragments import (
    FragmentDictionary,
    FragmentClass,
    load_fragments,
    parse_fragments,
    DEFAULT_FRAGMENTS_PATH,
)


@pytest.fixture
def fragments():
    return load_fragments()


class TestPackagedDictionary:
    """Tests for the packaged classes.yaml."""

    def test_class_count(self, fragments):
        """Test that all eleven classes load."""
        assert len(fragments) == 11

    def test_marker_order(self, fragments):
        """Test that class indices follow file order."""
        assert fragments.markers == "svVcBCimMDd"

    def test_class_sizes(self, fragments):
        """Test per-class fragment counts."""
        sizes = [fragments.class_size(i) for i in range(len(fragments))]
        assert sizes == [115, 6, 22, 21, 43, 36, 47, 43, 23, 21, 36]

    def test_known_fragments(self, fragments):
        """Test a few fragments by position."""
        assert fragments.class_fragment(0, 0) == "ach"
        assert fragments.class_fragment(0, 102) == "tur"
        assert fragments.class_fragment(0, 114) == "yer"
        assert fragments.class_fragment(1, 5) == "y"
        assert fragments.class_fragment(10, 35) == "uzz"

    def test_yaml_keywords_stay_strings(self, fragments):
        """Test that fragments such as 'on' are not parsed as booleans."""
        syllables = fragments.get('s').fragments
        assert "on" in syllables
        assert all(isinstance(f, str) for f in syllables)

    def test_fragments_are_lowercase_ascii(self, fragments):
        """Test that packaged fragments are plain lowercase words."""
        for cls in fragments.classes:
            for fragment in cls.fragments:
                assert fragment
                assert fragment.isascii()
                assert fragment == fragment.lower()

    def test_loading_is_cached(self):
        """Test that repeated loads return the same object."""
        assert load_fragments() is load_fragments(DEFAULT_FRAGMENTS_PATH)


class TestClassifier:
    """Tests for class_index()."""

    @pytest.mark.parametrize("marker,index", [
        ('s', 0), ('v', 1), ('V', 2), ('c', 3), ('B', 4), ('C', 5),
        ('i', 6), ('m', 7), ('M', 8), ('D', 9), ('d', 10),
    ])
    def test_markers(self, fragments, marker, index):
        """Test each marker's class index."""
        assert fragments.class_index(marker) == index

    @pytest.mark.parametrize("char", ['a', 'b', 'x', 'S', ' ', '-', "'", '!', '|', '(', '>', 'é'])
    def test_unmapped(self, fragments, char):
        """Test that other characters have no class."""
        assert fragments.class_index(char) is None

    def test_contains(self, fragments):
        """Test marker membership."""
        assert 'V' in fragments
        assert 'x' not in fragments


class TestOutOfRange:
    """Out-of-range lookups are programming errors."""

    def test_bad_class_index(self, fragments):
        with pytest.raises(IndexError):
            fragments.class_size(11)
        with pytest.raises(IndexError):
            fragments.class_size(-1)

    def test_bad_ordinal(self, fragments):
        with pytest.raises(IndexError):
            fragments.class_fragment(1, 6)
        with pytest.raises(IndexError):
            fragments.class_fragment(1, -1)


class TestCustomDictionary:
    """Tests for parse_fragments() and user-supplied YAML."""

    def test_parse_minimal(self):
        """Test building a dictionary from parsed data."""
        fragments = parse_fragments({
            'classes': [
                {'marker': 'x', 'description': 'test', 'fragments': ['zorg', 'blix']},
            ]
        })
        assert isinstance(fragments, FragmentDictionary)
        assert fragments.class_index('x') == 0
        assert fragments.class_fragment(0, 1) == 'blix'
        assert fragments.classes[0] == FragmentClass('x', 'test', ('zorg', 'blix'))

    def test_load_from_file(self, tmp_path):
        """Test loading a YAML file from disk."""
        path = tmp_path / "custom.yaml"
        path.write_text(
            "classes:\n"
            "  - marker: \"x\"\n"
            "    fragments: [\"zorg\"]\n"
        )
        fragments = load_fragments(path)
        assert fragments.markers == "x"
        assert fragments.class_fragment(0, 0) == "zorg"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_fragments(tmp_path / "nope.yaml")

    @pytest.mark.parametrize("data", [
        None,
        {},
        {'classes': 'x'},
        {'classes': ['x']},
        {'classes': [{'marker': 'xy', 'fragments': ['a']}]},
        {'classes': [{'marker': '', 'fragments': ['a']}]},
        {'classes': [{'marker': '|', 'fragments': ['a']}]},
        {'classes': [{'marker': '(', 'fragments': ['a']}]},
        {'classes': [{'marker': '!', 'fragments': ['a']}]},
        {'classes': [{'marker': 'x', 'fragments': []}]},
        {'classes': [{'marker': 'x'}]},
        {'classes': [
            {'marker': 'x', 'fragments': ['a']},
            {'marker': 'x', 'fragments': ['b']},
        ]},
    ])
    def test_malformed(self, data):
        """Test that malformed dictionaries are rejected."""
        with pytest.raises(ValueError):
            parse_fragments(data)

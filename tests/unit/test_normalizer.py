"""Unit tests for the text normalizer."""

import pytest

from campus_search.core.normalizer import (
    TextNormalizer,
    approximately_equal,
    edit_distance,
    to_comparable_form,
)


class TestTextNormalizer:
    """Test cases for the TextNormalizer class."""
    
    @pytest.fixture
    def normalizer(self):
        """Create a normalizer with the default threshold."""
        return TextNormalizer()
    
    def test_initialization(self, normalizer):
        assert normalizer.similarity_threshold == 0.7
    
    def test_comparable_form_chinese(self, normalizer):
        """Chinese text becomes tone-free pinyin without spaces."""
        assert normalizer.to_comparable_form("兰州拉面") == "lanzhoulamian"
        assert normalizer.to_comparable_form("南 门") == "nanmen"
    
    def test_comparable_form_latin(self, normalizer):
        """Latin text is only lower-cased and stripped of whitespace."""
        assert normalizer.to_comparable_form("Lanzhou Noodles") == "lanzhounoodles"
        assert normalizer.to_comparable_form("  KFC\t") == "kfc"
    
    def test_comparable_form_mixed(self, normalizer):
        assert normalizer.to_comparable_form("KFC 南门店") == "kfcnanmendian"
    
    def test_comparable_form_empty(self, normalizer):
        assert normalizer.to_comparable_form("") == ""
        assert normalizer.to_comparable_form(None) == ""
    
    def test_approximately_equal_identical(self, normalizer):
        for text in ["兰州拉面", "kfc", "a", "南门 夜市"]:
            assert normalizer.approximately_equal(text, text) is True
    
    def test_approximately_equal_homophones(self, normalizer):
        """Different characters with the same reading are equal."""
        assert normalizer.approximately_equal("兰州拉面", "蓝州拉面") is True
        assert normalizer.approximately_equal("麦当劳", "麦当老") is True
    
    def test_approximately_equal_containment(self, normalizer):
        assert normalizer.approximately_equal("兰州拉面", "拉面") is True
        assert normalizer.approximately_equal("lamian", "兰州拉面") is True
    
    def test_approximately_equal_small_difference(self, normalizer):
        # One edit over thirteen characters
        assert normalizer.approximately_equal("lanzhoulamian", "lanzoulamian") is True
    
    def test_approximately_equal_unrelated(self, normalizer):
        assert normalizer.approximately_equal("rice", "noodle") is False
        assert normalizer.approximately_equal("蜜雪冰城", "理发店") is False
    
    def test_approximately_equal_both_empty(self, normalizer):
        assert normalizer.approximately_equal("", "") is True
    
    def test_custom_threshold(self):
        strict = TextNormalizer(similarity_threshold=0.95)
        lenient = TextNormalizer(similarity_threshold=0.5)
        
        assert strict.approximately_equal("lanzhoulamian", "lanzoulamian") is False
        assert lenient.approximately_equal("lanzhoulamian", "lanzoulamian") is True


class TestEditDistance:
    """Test cases for the Levenshtein distance."""
    
    def test_identical(self):
        assert edit_distance("abc", "abc") == 0
        assert edit_distance("", "") == 0
    
    def test_empty_side(self):
        assert edit_distance("", "abc") == 3
        assert edit_distance("abc", "") == 3
    
    def test_single_operations(self):
        assert edit_distance("abc", "abd") == 1  # substitution
        assert edit_distance("abc", "abcd") == 1  # insertion
        assert edit_distance("abc", "ac") == 1  # deletion
    
    def test_classic_example(self):
        assert edit_distance("kitten", "sitting") == 3
    
    def test_no_case_folding(self):
        assert edit_distance("ABC", "abc") == 3


class TestModuleFunctions:
    """The module-level helpers use the default normalizer."""
    
    def test_to_comparable_form(self):
        assert to_comparable_form("北门") == "beimen"
    
    def test_approximately_equal(self):
        assert approximately_equal("北门", "beimen") is True
        assert approximately_equal("北门", "xyz") is False

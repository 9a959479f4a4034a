"""Text normalization utilities for phonetic comparison."""

import re

from rapidfuzz.distance import Levenshtein

from .phonetic import to_romanized


class TextNormalizer:
    """Turns text into a comparable phonetic key and compares keys."""
    
    def __init__(self, similarity_threshold: float = 0.7) -> None:
        """
        Initialize the normalizer.
        
        Args:
            similarity_threshold: Similarity above which two keys count as
                approximately equal
        """
        self.similarity_threshold = similarity_threshold
        self.whitespace_regex = re.compile(r"\s+")
    
    def to_comparable_form(self, text: str) -> str:
        """
        Romanize, lower-case and strip all whitespace.
        
        Latin text only goes through the lower-case and whitespace pass.
        
        Args:
            text: Input text
            
        Returns:
            Comparable form, empty for empty input
        """
        if not text:
            return ""
        return self.whitespace_regex.sub("", to_romanized(text).lower())
    
    def approximately_equal(self, text_a: str, text_b: str) -> bool:
        """
        Check whether two texts sound alike.
        
        The comparable forms are equal, one contains the other, or their
        Levenshtein similarity exceeds the configured threshold.
        """
        form_a = self.to_comparable_form(text_a)
        form_b = self.to_comparable_form(text_b)
        
        if form_a == form_b:
            return True
        if form_a in form_b or form_b in form_a:
            return True
        
        max_len = max(len(form_a), len(form_b))
        similarity = 1 - self.edit_distance(form_a, form_b) / max_len
        return similarity > self.similarity_threshold
    
    @staticmethod
    def edit_distance(a: str, b: str) -> int:
        """Levenshtein distance with unit costs; no case folding is applied."""
        return Levenshtein.distance(a, b)


_default_normalizer = TextNormalizer()


def to_comparable_form(text: str) -> str:
    return _default_normalizer.to_comparable_form(text)


def approximately_equal(text_a: str, text_b: str) -> bool:
    return _default_normalizer.approximately_equal(text_a, text_b)


def edit_distance(a: str, b: str) -> int:
    return TextNormalizer.edit_distance(a, b)

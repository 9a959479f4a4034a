"""
Phonetic and fuzzy matching capabilities backed by third-party libraries.

pypinyin provides romanization of Chinese text and rapidfuzz provides the
approximate substring edit distances. Everything else in the package reaches these
libraries only through the three functions below.
"""

import re
import sys
from functools import lru_cache
from typing import Iterator, List, NamedTuple, Sequence, Tuple

from pypinyin import Style, lazy_pinyin, pinyin
from rapidfuzz.distance import LCSseq, Levenshtein

_HAN_REGEX = re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]")
_WHITESPACE_REGEX = re.compile(r"\s+")
_COMPOUND_INITIALS = ("zh", "ch", "sh")

# Stands in for a perfect field distance so the weighted product stays defined
_EPSILON = sys.float_info.epsilon


class FuzzyField(NamedTuple):
    """A record attribute searched by the fuzzy fallback, with its weight."""
    
    name: str
    weight: float


class FuzzyHit(NamedTuple):
    """A fuzzy search hit; score is a distance, 0 is best and 1 is worst."""
    
    id: str
    score: float


def to_romanized(text: str) -> str:
    """
    Romanize text into tone-free pinyin.
    
    Han characters become their most common reading; any other characters
    are kept as they are.
    """
    if not text:
        return ""
    return "".join(lazy_pinyin(text, style=Style.NORMAL))


@lru_cache(maxsize=8192)
def _readings(char: str) -> Tuple[str, ...]:
    """All tone-free readings of a single Han character, heteronyms included."""
    if not _HAN_REGEX.match(char):
        return ()
    candidates = pinyin(char, style=Style.NORMAL, heteronym=True)[0]
    seen: List[str] = []
    for reading in candidates:
        reading = reading.lower()
        if reading and reading not in seen:
            seen.append(reading)
    return tuple(seen)


def _advance(char: str, keyword: str, pos: int) -> Iterator[int]:
    """Yield keyword positions reachable by consuming one text character."""
    if keyword[pos] == char.lower():
        yield pos + 1
    rest = keyword[pos:]
    for reading in _readings(char):
        if rest.startswith(reading):
            yield pos + len(reading)
        elif reading.startswith(rest):
            # Keyword ends part way through this reading
            yield len(keyword)
        if reading[:2] in _COMPOUND_INITIALS and rest.startswith(reading[:2]):
            yield pos + 2
        if rest[0] == reading[0]:
            yield pos + 1


def romanized_substring_match(text: str, keyword: str) -> bool:
    """
    Check whether keyword matches consecutive characters of text by pinyin.
    
    Each character may be matched by itself, a full reading or its initial.
    The last matched character may also be matched by a reading prefix, so
    "nanm" and "nm" both match "南门".
    
    Args:
        text: Text to search in
        keyword: Pinyin, initials, Han characters or a mix of them
        
    Returns:
        True if the keyword matches somewhere in the text
    """
    keyword = _WHITESPACE_REGEX.sub("", keyword or "").lower()
    chars = _WHITESPACE_REGEX.sub("", text or "")
    if not keyword or not chars:
        return False
    
    for start in range(len(chars)):
        frontier = {0}
        for char in chars[start:]:
            reachable = set()
            for pos in frontier:
                for nxt in _advance(char, keyword, pos):
                    if nxt >= len(keyword):
                        return True
                    reachable.add(nxt)
            if not reachable:
                break
            frontier = reachable
    return False


def _substring_errors(keyword: str, text: str, max_errors: int) -> int:
    """
    Fewest edits turning ``keyword`` into some substring of ``text``.
    
    Only windows within ``max_errors`` of the keyword length are tried. Any
    result above ``max_errors`` is reported as ``len(keyword)``.
    """
    size = len(keyword)
    # Keyword characters outside the longest common subsequence each cost an edit
    if size - LCSseq.similarity(keyword, text) > max_errors:
        return size
    
    best = max_errors + 1
    shortest = max(1, size - max_errors)
    longest = min(len(text), size + max_errors)
    for length in range(shortest, longest + 1):
        for start in range(len(text) - length + 1):
            errors = Levenshtein.distance(
                keyword, text[start:start + length], score_cutoff=best - 1
            )
            if errors < best:
                best = errors
                if best == 0:
                    return 0
    return best if best <= max_errors else size


def _field_distance(keyword: str, value, threshold: float) -> float:
    """
    Best distance between keyword and a field value (string or list).
    
    The distance is the number of edits needed to find the keyword inside
    the value, divided by the keyword length. Keyword characters with no
    counterpart in a shorter value count as edits.
    """
    values = value if isinstance(value, (list, tuple)) else [value]
    max_errors = int(threshold * len(keyword) + 1e-9)
    best = 1.0
    for item in values:
        if not item:
            continue
        errors = _substring_errors(keyword, str(item).lower(), max_errors)
        best = min(best, errors / len(keyword))
    return best


def weighted_fuzzy_search(
    records: Sequence,
    fields: Sequence[FuzzyField],
    keyword: str,
    threshold: float = 0.4
) -> List[FuzzyHit]:
    """
    Weighted, location-agnostic fuzzy search over record fields.
    
    A field hits when its distance is within the threshold. The distances of
    the hit fields are combined as a weighted product, so records hitting
    several heavy fields rank first.
    
    Args:
        records: Objects exposing an ``id`` and the named fields
        fields: Fields to search with their relative weights
        keyword: Search keyword
        threshold: Maximum field distance (0-1) that still counts as a hit
        
    Returns:
        Hits ordered by score ascending, ties in input order
    """
    keyword = (keyword or "").strip().lower()
    if not keyword or not records or not fields:
        return []
    
    total_weight = sum(field.weight for field in fields)
    hits = []
    
    for index, record in enumerate(records):
        combined = 1.0
        matched = False
        for field in fields:
            distance = _field_distance(keyword, getattr(record, field.name, None), threshold)
            if distance > threshold:
                continue
            matched = True
            combined *= max(distance, _EPSILON) ** (field.weight / total_weight)
        if matched:
            hits.append((combined, index, record.id))
    
    hits.sort()
    return [FuzzyHit(id=record_id, score=score) for score, _, record_id in hits]

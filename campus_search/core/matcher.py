"""Multi-tier keyword matching over the lightweight search index."""

import math
from typing import Callable, Dict, List, Optional, Sequence

from ..models.search import ScoredMatch, SearchRecord
from .normalizer import TextNormalizer
from .phonetic import FuzzyField, romanized_substring_match, weighted_fuzzy_search

# Literal and phonetic tiers score fields in this order
LITERAL_SCORES = {"name": 100, "location": 95, "tags": 90, "menu": 85}
PHONETIC_SCORES = {"name": 85, "location": 80, "tags": 75, "menu": 70}
HOMOPHONE_SCORES = {"name": 70, "location": 65}
FUZZY_SCORE_CEILING = 60

FUZZY_FIELDS = (
    FuzzyField("name", 2.0),
    FuzzyField("location_description", 1.5),
    FuzzyField("tags", 1.0),
    FuzzyField("menu_text", 1.2),
)

Claims = Dict[str, int]


class MultiTierMatcher:
    """
    Ranks search records for a keyword with four strategies in priority order.
    
    1. literal substring (100/95/90/85 for name/location/tags/menu)
    2. pinyin substring (85/80/75/70)
    3. homophone on name/location (70/65)
    4. weighted fuzzy fallback (0-60)
    
    A record is scored by the first tier it qualifies for; later tiers never
    overwrite an existing score.
    """
    
    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        fuzzy_threshold: float = 0.4
    ) -> None:
        """
        Initialize the matcher.
        
        Args:
            normalizer: Normalizer used by the homophone tier
            fuzzy_threshold: Maximum field distance accepted by the fuzzy tier
        """
        self.normalizer = normalizer or TextNormalizer()
        self.fuzzy_threshold = fuzzy_threshold
    
    def search(self, keyword: str, records: Sequence[SearchRecord]) -> List[str]:
        """
        Return matching record ids, most relevant first.
        
        An empty or whitespace-only keyword returns an empty list.
        """
        return [match.id for match in self.score(keyword, records)]
    
    def score(self, keyword: str, records: Sequence[SearchRecord]) -> List[ScoredMatch]:
        """
        Score every matching record, most relevant first.
        
        Ties keep the order in which records were first claimed.
        """
        if not keyword or not keyword.strip() or not records:
            return []
        
        keyword = keyword.strip().lower()
        claims: Claims = {}
        
        self._literal_tier(keyword, records, claims)
        self._phonetic_tier(keyword, records, claims)
        self._homophone_tier(keyword, records, claims)
        self._fuzzy_tier(keyword, records, claims)
        
        ranked = sorted(claims.items(), key=lambda item: -item[1])
        return [ScoredMatch(id=record_id, score=score) for record_id, score in ranked]
    
    def _literal_tier(self, keyword: str, records: Sequence[SearchRecord], claims: Claims) -> None:
        self._field_tier(
            records, claims, LITERAL_SCORES,
            lambda text: keyword in text.lower()
        )
    
    def _phonetic_tier(self, keyword: str, records: Sequence[SearchRecord], claims: Claims) -> None:
        self._field_tier(
            records, claims, PHONETIC_SCORES,
            lambda text: romanized_substring_match(text, keyword)
        )
    
    def _homophone_tier(self, keyword: str, records: Sequence[SearchRecord], claims: Claims) -> None:
        for record in records:
            if record.id in claims:
                continue
            if record.name and self.normalizer.approximately_equal(record.name, keyword):
                claims[record.id] = HOMOPHONE_SCORES["name"]
            elif (record.location_description
                    and self.normalizer.approximately_equal(record.location_description, keyword)):
                claims[record.id] = HOMOPHONE_SCORES["location"]
    
    def _fuzzy_tier(self, keyword: str, records: Sequence[SearchRecord], claims: Claims) -> None:
        # Fuzzy scores are per record; claimed records are skipped
        unclaimed = [record for record in records if record.id not in claims]
        hits = weighted_fuzzy_search(unclaimed, FUZZY_FIELDS, keyword, self.fuzzy_threshold)
        for hit in hits:
            if hit.id in claims:
                continue
            # Half-up rounding into the 0-60 band
            claims[hit.id] = min(
                FUZZY_SCORE_CEILING,
                max(0, math.floor((1 - hit.score) * FUZZY_SCORE_CEILING + 0.5))
            )
    
    @staticmethod
    def _field_tier(
        records: Sequence[SearchRecord],
        claims: Claims,
        scores: Dict[str, int],
        matches: Callable[[str], bool]
    ) -> None:
        """Claim each unclaimed record by its first matching field."""
        for record in records:
            if record.id in claims:
                continue
            if record.name and matches(record.name):
                claims[record.id] = scores["name"]
            elif record.location_description and matches(record.location_description):
                claims[record.id] = scores["location"]
            elif any(tag and matches(tag) for tag in record.tags):
                claims[record.id] = scores["tags"]
            elif record.menu_text and matches(record.menu_text):
                claims[record.id] = scores["menu"]


_default_matcher = MultiTierMatcher()


def search(keyword: str, records: Sequence[SearchRecord]) -> List[str]:
    """Rank records for a keyword with the default matcher settings."""
    return _default_matcher.search(keyword, records)

"""
Plausibility Scoring Module
Decides whether a decoded literal or the literal itself is the readable plaintext

Scoring is pluggable. Three metrics are provided:
- adjacent: mean absolute ordinal difference between neighbouring characters
- shannon: Shannon entropy in bits per character
- mean-ordinal: mean character code, accepted inside a printable band
Lower scores mean "more like natural-language text" for the first two.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from .exceptions import ConfigurationError


class ScoringStrategy(ABC):
    """Statistical metric over a character sequence; lower is more text-like"""

    name = ''
    default_ceiling = 0.0

    @abstractmethod
    def score(self, text: str) -> float:
        pass

    def prefers_decoded(self, literal_score: float, decoded_score: float) -> bool:
        """True when the decoded reading is the more plausible plaintext"""
        return decoded_score < literal_score


class AdjacentDistanceScore(ScoringStrategy):
    """
    Mean |ord(c[i+1]) - ord(c[i])| over the string

    Words stay within a narrow band of the alphabet, while decoded noise
    jumps across the whole byte range. Independent of string length, so
    a literal and its shorter decoding compare fairly.
    """

    name = 'adjacent'
    default_ceiling = 40.0

    def score(self, text: str) -> float:
        if len(text) < 2:
            return 0.0
        total = sum(abs(ord(b) - ord(a)) for a, b in zip(text, text[1:]))
        return total / (len(text) - 1)


class ShannonEntropyScore(ScoringStrategy):
    """Shannon entropy H(X) = -sum(p(x) * log2(p(x))) over character frequencies"""

    name = 'shannon'
    default_ceiling = 4.5

    def score(self, text: str) -> float:
        if not text:
            return 0.0

        # Count frequency of each character
        freq = {}
        for char in text:
            freq[char] = freq.get(char, 0) + 1

        entropy = 0.0
        length = len(text)
        for count in freq.values():
            probability = count / length
            entropy -= probability * math.log2(probability)

        return entropy


class MeanOrdinalScore(ScoringStrategy):
    """
    Mean character code of the string

    Printable ASCII text averages inside [49, 122]. The decoded reading is
    taken as plaintext when its mean falls in that band, regardless of how
    the literal scores. Otherwise the decoding is always shown as its
    ciphertext, so the ceiling is unbounded.
    """

    name = 'mean-ordinal'
    default_ceiling = math.inf
    lower_bound = 49.0
    upper_bound = 122.0

    def score(self, text: str) -> float:
        if not text:
            return 0.0
        return sum(ord(c) for c in text) / len(text)

    def prefers_decoded(self, literal_score: float, decoded_score: float) -> bool:
        return self.lower_bound <= decoded_score <= self.upper_bound


SCORING_STRATEGIES: Dict[str, ScoringStrategy] = {
    AdjacentDistanceScore.name: AdjacentDistanceScore(),
    ShannonEntropyScore.name: ShannonEntropyScore(),
    MeanOrdinalScore.name: MeanOrdinalScore(),
}
DEFAULT_SCORING = AdjacentDistanceScore.name


def get_scoring_strategy(name: str) -> ScoringStrategy:
    """Look up a scoring strategy by name"""
    strategy = SCORING_STRATEGIES.get(name.lower())
    if strategy is None:
        raise ConfigurationError(
            f"Unknown scoring strategy: {name}. Available: {', '.join(sorted(SCORING_STRATEGIES))}"
        )
    return strategy


def render_bytes(data: bytes) -> str:
    """Render decoded bytes one character per byte"""
    return data.decode('latin-1')


@dataclass(frozen=True)
class ResolvedString:
    """
    Final verdict for one literal

    `ciphertext` is None when neither reading was plausible enough to
    surface the decoded one; `plaintext` then holds the literal unchanged.
    """
    literal: str
    method: str
    codec: str
    decoded: bytes
    plaintext: str
    ciphertext: Optional[str]
    literal_score: float
    decoded_score: float

    @property
    def resolved(self) -> bool:
        return self.ciphertext is not None

    @property
    def decoded_is_plaintext(self) -> bool:
        return self.resolved and self.ciphertext == self.literal

    @property
    def confidence(self) -> float:
        """Score of the reading reported as plaintext"""
        return self.decoded_score if self.decoded_is_plaintext else self.literal_score

    def to_dict(self) -> Dict:
        return {
            'literal': self.literal,
            'method': self.method,
            'codec': self.codec,
            'ciphertext': self.ciphertext,
            'plaintext': self.plaintext,
            'decoded_hex': self.decoded.hex(),
            'literal_score': round(self.literal_score, 4),
            'decoded_score': round(self.decoded_score, 4),
            'resolved': self.resolved,
        }


class PlausibilityHeuristic:
    """
    Picks the more readable of a literal and its decoding

    A decoding the strategy prefers wins outright (for the adjacent and
    shannon metrics, the lower score). Otherwise the literal is taken as
    plaintext, and the decoding is only surfaced as its ciphertext when it
    still scores below the plausibility ceiling.
    """

    def __init__(self, strategy: ScoringStrategy = None, ceiling: float = None, min_length: int = 3):
        """
        Args:
            strategy: Scoring metric (default: adjacent distance)
            ceiling: Plausibility ceiling (default: the strategy's own)
            min_length: Shorter literals or decodings are not reported
        """
        self.strategy = strategy or SCORING_STRATEGIES[DEFAULT_SCORING]
        self.ceiling = self.strategy.default_ceiling if ceiling is None else ceiling
        self.min_length = min_length

    def judge(self, decoded_result) -> Optional[ResolvedString]:
        """
        Decide which reading of a decoded literal to report

        Args:
            decoded_result: DecodedResult from the codec dispatcher

        Returns:
            ResolvedString, or None when the inputs are too short to report
        """
        literal = decoded_result.candidate.text
        decoded_text = render_bytes(decoded_result.data)

        if len(literal) < self.min_length or len(decoded_text) < self.min_length:
            return None

        literal_score = self.strategy.score(literal)
        decoded_score = self.strategy.score(decoded_text)

        if self.strategy.prefers_decoded(literal_score, decoded_score):
            ciphertext, plaintext = literal, decoded_text
        elif decoded_score < self.ceiling:
            ciphertext, plaintext = decoded_text, literal
        else:
            ciphertext, plaintext = None, literal

        return ResolvedString(
            literal=literal,
            method=decoded_result.candidate.method,
            codec=decoded_result.codec,
            decoded=decoded_result.data,
            plaintext=plaintext,
            ciphertext=ciphertext,
            literal_score=literal_score,
            decoded_score=decoded_score,
        )

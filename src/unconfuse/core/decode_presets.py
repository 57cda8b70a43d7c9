"""
Decoding Presets
Predefined plausibility settings for different analysis scenarios

Instead of hand-tuning the scoring metric and ceiling per sample, pick a
preset that matches how much noise you are willing to see.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class PlausibilityThresholds:
    """Settings for the plausibility heuristic"""
    scoring: str = "adjacent"                  # Scoring strategy name
    plausibility_ceiling: Optional[float] = None  # None = strategy default
    min_length: int = 3                        # Shorter inputs are not reported


@dataclass
class DecodePreset:
    """Complete decoding configuration preset"""
    name: str
    description: str
    thresholds: PlausibilityThresholds


class PresetLibrary:
    """Library of predefined decoding presets"""

    @staticmethod
    def get_preset(name: str) -> Optional[DecodePreset]:
        """Get preset by name"""
        presets = {
            "balanced": PresetLibrary.balanced(),
            "strict": PresetLibrary.strict(),
            "entropy": PresetLibrary.entropy(),
            "ordinal": PresetLibrary.ordinal(),
        }
        return presets.get(name.lower())

    @staticmethod
    def list_presets() -> List[str]:
        """List all available preset names"""
        return ["balanced", "strict", "entropy", "ordinal"]

    @staticmethod
    def balanced() -> DecodePreset:
        """
        Balanced preset: adjacent-distance scoring with its default ceiling

        Use when:
        - Triage of an unknown sample
        - Short literals are common (the metric ignores length)
        """
        return DecodePreset(
            name="balanced",
            description="Adjacent-distance scoring, default ceiling",
            thresholds=PlausibilityThresholds(scoring="adjacent", plausibility_ceiling=40.0, min_length=3),
        )

    @staticmethod
    def strict() -> DecodePreset:
        """
        Strict preset: only surface decodings that look clearly like text

        Use when:
        - Output feeds other tooling
        - Low tolerance for noise in the results
        """
        return DecodePreset(
            name="strict",
            description="Adjacent-distance scoring, low ceiling, longer minimum",
            thresholds=PlausibilityThresholds(scoring="adjacent", plausibility_ceiling=28.0, min_length=4),
        )

    @staticmethod
    def entropy() -> DecodePreset:
        """
        Entropy preset: Shannon entropy scoring

        Use when:
        - Literals are long (entropy is unreliable below ~16 characters)
        """
        return DecodePreset(
            name="entropy",
            description="Shannon entropy scoring (bits per character)",
            thresholds=PlausibilityThresholds(scoring="shannon", plausibility_ceiling=4.5, min_length=3),
        )

    @staticmethod
    def ordinal() -> DecodePreset:
        """
        Ordinal preset: accept decodings whose mean character code looks printable

        Use when:
        - Five-bit literals, where the mean byte value separates text from noise
        - Every decoding should be shown, plausible or not
        """
        return DecodePreset(
            name="ordinal",
            description="Mean character code within [49, 122], no ceiling",
            thresholds=PlausibilityThresholds(scoring="mean-ordinal", plausibility_ceiling=None, min_length=3),
        )

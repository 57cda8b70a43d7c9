"""
Core Decoding Engine
Orchestrates detection, extraction, decoding and plausibility scoring
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from .analyzer import PlausibilityHeuristic, ResolvedString, get_scoring_strategy
from .decode_presets import PresetLibrary
from .deobfuscator import CodecDispatcher
from .exceptions import ConfigurationError
from .extractor import CandidateLiteral, LiteralExtractor
from .detector import VariantDetector
from .tokenizer import JSTokenizer

logger = logging.getLogger(__name__)

STATUS_UNSUPPORTED = "unsupported"
STATUS_DECODED = "decoded"
DIRECT_INPUT = "direct"


@dataclass
class DecodeConfig:
    """
    Configuration for the decoding engine

    Can be initialized from:
    1. Preset name: DecodeConfig(preset="strict")
    2. Custom parameters: DecodeConfig(scoring="shannon", plausibility_ceiling=4.0)
    3. Preset + overrides: DecodeConfig.from_preset("balanced", min_length=5)
    """
    scoring: str = "adjacent"
    plausibility_ceiling: Optional[float] = None  # None = scoring strategy default
    min_length: int = 3
    max_workers: int = 1  # >1 decodes candidates on a thread pool
    preset: Optional[str] = None

    def __post_init__(self):
        """Apply preset if specified"""
        if self.preset:
            preset_obj = PresetLibrary.get_preset(self.preset)
            if not preset_obj:
                raise ConfigurationError(
                    f"Unknown preset: {self.preset}. Available: {PresetLibrary.list_presets()}"
                )
            self.scoring = preset_obj.thresholds.scoring
            self.plausibility_ceiling = preset_obj.thresholds.plausibility_ceiling
            self.min_length = preset_obj.thresholds.min_length

        # Fail early on a bad strategy name rather than on first use
        get_scoring_strategy(self.scoring)

    @staticmethod
    def from_preset(preset_name: str, **overrides) -> 'DecodeConfig':
        """
        Create config from preset with optional overrides

        Example:
            config = DecodeConfig.from_preset("strict", min_length=6)
        """
        config = DecodeConfig(preset=preset_name)

        for key, value in overrides.items():
            if hasattr(config, key):
                setattr(config, key, value)

        # Overrides may have changed the strategy name
        get_scoring_strategy(config.scoring)
        return config


@dataclass
class DecodeReport:
    """
    Complete results of one decode pass

    status is "unsupported" when the obfuscator's fingerprint is absent,
    in which case no literal was decoded.
    """
    status: str = STATUS_DECODED
    level: int = 0
    source: str = ""
    candidates_found: int = 0
    malformed: List[CandidateLiteral] = field(default_factory=list)
    results: List[ResolvedString] = field(default_factory=list)

    @property
    def supported(self) -> bool:
        return self.status != STATUS_UNSUPPORTED

    @property
    def skipped(self) -> int:
        """Number of candidates their codec rejected as malformed"""
        return len(self.malformed)

    def to_dict(self) -> Dict:
        """Convert results to dictionary for JSON export"""
        return {
            'metadata': {
                'source': self.source,
                'status': self.status,
                'level': self.level,
            },
            'stats': {
                'candidates_found': self.candidates_found,
                'skipped_malformed': self.skipped,
                'reported': len(self.results),
                'resolved': sum(1 for r in self.results if r.resolved),
            },
            'results': [r.to_dict() for r in self.results],
            'malformed': [c.to_dict() for c in self.malformed],
        }


class DecodeEngine:
    """
    Main engine that coordinates all modules

    Workflow:
    1. Count decoy-function fingerprints to get the variant level (stop at 0)
    2. Extract candidate literals (array, packed table, quoted alphanumeric)
    3. Decode each candidate with the codec its shape and the level select
    4. Score literal vs decoding and keep the more plausible plaintext
    """

    def __init__(self, config: DecodeConfig = None):
        """
        Initialize engine with all modules

        Args:
            config: Decoding configuration (optional)
        """
        self.config = config if config else DecodeConfig()

        tokenizer = JSTokenizer()
        self.tokenizer = tokenizer
        self.detector = VariantDetector(tokenizer)
        self.extractor = LiteralExtractor(tokenizer)
        self.dispatcher = CodecDispatcher(self.config)
        self.heuristic = PlausibilityHeuristic(
            strategy=get_scoring_strategy(self.config.scoring),
            ceiling=self.config.plausibility_ceiling,
            min_length=self.config.min_length,
        )

    def decode_file(self, file_path: Union[str, Path]) -> DecodeReport:
        """
        Decode all concealed strings of a JavaScript file

        Args:
            file_path: Path to the obfuscated file

        Returns:
            DecodeReport for the file
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        source = file_path.read_bytes().decode('utf-8', errors='replace')
        report = self.decode_source(source)
        report.source = file_path.name
        return report

    def decode_source(self, source: Union[str, bytes]) -> DecodeReport:
        """
        Decode all concealed strings of a source text

        Args:
            source: JavaScript source (bytes are read as UTF-8)

        Returns:
            DecodeReport; status "unsupported" if the fingerprint is absent
        """
        if isinstance(source, bytes):
            source = source.decode('utf-8', errors='replace')

        tokens = self.tokenizer.tokenize(source)
        level = self.detector.detect_tokens(tokens)
        report = DecodeReport(level=level, source="text_input")

        if level == 0:
            logger.info("No obfuscator fingerprint found; input not supported")
            report.status = STATUS_UNSUPPORTED
            return report

        candidates = self.extractor.extract_tokens(tokens)
        report.candidates_found = len(candidates)
        logger.info("Variant level %d, %d candidate literals", level, len(candidates))

        self._decode_candidates(report, candidates, level)
        return report

    def decode_string(self, literal: str, level: int = 2) -> DecodeReport:
        """
        Decode a single literal directly, bypassing extraction and detection

        Args:
            literal: Literal text (escape sequences are expanded)
            level: Variant level selecting the default codec (1 = base-91)

        Returns:
            DecodeReport with at most one result
        """
        if level < 1:
            raise ConfigurationError("Level must be at least 1 for direct decoding")

        candidate = self.extractor.candidate_from_text(literal, DIRECT_INPUT)
        report = DecodeReport(level=level, source=DIRECT_INPUT)
        if candidate is None:
            return report

        report.candidates_found = 1
        self._decode_candidates(report, [candidate], level)
        return report

    def _decode_candidates(self, report: DecodeReport, candidates: List[CandidateLiteral], level: int):
        """Decode and judge candidates in order, appending to the report"""
        if self.config.max_workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                decoded = list(pool.map(lambda c: self.dispatcher.decode(c, level), candidates))
        else:
            decoded = [self.dispatcher.decode(c, level) for c in candidates]

        for candidate, result in zip(candidates, decoded):
            if result is None:
                report.malformed.append(candidate)
                continue
            verdict = self.heuristic.judge(result)
            if verdict is not None:
                report.results.append(verdict)

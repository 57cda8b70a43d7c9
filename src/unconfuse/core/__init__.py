"""
Core decoding engine: tokenizer, literal extraction, variant detection,
codec dispatch and plausibility scoring
"""

from .engine import DecodeConfig, DecodeEngine, DecodeReport

__all__ = ['DecodeConfig', 'DecodeEngine', 'DecodeReport']

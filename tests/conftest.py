import pytest

from unconfuse.core.engine import DecodeConfig, DecodeEngine

# Two decoy functions: variant level 2, 5-bit packing is the default codec
FINGERPRINT_LEVEL_2 = """
function _0x5a1e(_0x1, _0x2, _0x3 = _0x1 + 1, _0x4 = { k: [1, 2] }) { return _0x2; }
var _0x9b = function (a, b, c = [], d = (1, 2)) { return c; };
"""

# One decoy function: variant level 1, base-91 is the default codec
FINGERPRINT_LEVEL_1 = """
function _0xdead(p, q, r = 0, s = null) { return p; }
"""


@pytest.fixture
def engine():
    """Engine with default settings"""
    return DecodeEngine()


@pytest.fixture
def level2_source():
    return FINGERPRINT_LEVEL_2 + """
var _0xstrs = ['<~87cURD]i,"Ebo80~>', '{1094861636,83}', '*"379<$0'];
console.log(_0xstrs[0]);
"""


@pytest.fixture
def level1_source():
    return FINGERPRINT_LEVEL_1 + """
var _0xstrs = ['#G(I', '{65,1}'];
"""


@pytest.fixture
def shannon_engine():
    return DecodeEngine(DecodeConfig(preset="entropy"))

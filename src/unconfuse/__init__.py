"""
Unconfuse
Recovers concealed string literals from JS-Confuser obfuscated JavaScript
"""

__version__ = "1.0.0"

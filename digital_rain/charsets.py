"""
Rain Character Sets - Named glyph tables for falling drops.
"""

from typing import Dict, Tuple

from .errors import ConfigError, EMPTY_CHARSET


CHARACTER_SETS: Dict[str, str] = {
    "matrix": "λｱｲｳｴｵｶｷｸｹｺｻｼｽｾｿﾀﾁﾂﾃﾄﾅﾆﾇﾈﾉﾊﾋﾌﾍﾎﾏﾐﾑﾒﾓﾔﾕﾖﾗﾘﾙﾚﾛﾜﾝ",
    "binary": "01",
    "symbols": "!@#$%^&*()_+-=[]{}|;':\",./<>?",
    "emojis": "😂😅😊🔥💯✨🚀🎉🌟🌈",
    "kanji": "書道日本漢字文化侍",
    "greek": "αβγδεζηθικλμνξοπρστυφχψω",
    "cyrillic": "абвгдежзийклмнопрстуфхцчшщъыьэюя",
}

DEFAULT_CHARSET = "matrix"


def resolve_charset(value: str) -> Tuple[str, ...]:
    """
    Resolve a --chars value to a tuple of glyphs.

    A known set name (case-insensitive) selects that set; any other
    non-empty string is used as a custom set of its own characters.
    """
    named = CHARACTER_SETS.get(value.lower())
    if named is not None:
        return tuple(named)
    if not value:
        raise ConfigError(EMPTY_CHARSET, "character set cannot be empty")
    return tuple(value)

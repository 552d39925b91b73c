from types import MappingProxyType
from typing import Mapping, Tuple

# (first code point, last code point, tag); a subject is tagged by its first
# character that falls in one of these ranges.
SCRIPT_RANGES: Tuple[Tuple[int, int, str], ...] = (
    (0x4E00, 0x9FFF, "zh"),
    (0x3040, 0x309F, "ja"),
    (0x30A0, 0x30FF, "ja"),
    (0xAC00, 0xD7AF, "ko"),
    (0x0400, 0x04FF, "ru"),
)
DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES: Mapping[str, str] = MappingProxyType({
    "en": "English",
    "zh": "中文",
    "ja": "日本語",
    "ko": "한국어",
    "de": "Deutsch",
    "fr": "Français",
    "es": "Español",
    "pt": "Português",
    "ru": "Русский",
    "it": "Italiano",
})


def detect_language(subject: str) -> str:
    for char in subject:
        code = ord(char)
        for low, high, tag in SCRIPT_RANGES:
            if low <= code <= high:
                return tag
    return DEFAULT_LANGUAGE


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, code)

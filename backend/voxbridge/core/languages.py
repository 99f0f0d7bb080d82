"""
Language Registry
支持语言注册表 - 语言代码、显示名称与书写系统
"""

import re
from typing import TypedDict

from voxbridge.core.exceptions import UnsupportedLanguageError


class LanguageInfo(TypedDict):
    """语言显示信息"""

    name: str
    flag: str


# ============================================================
# 支持语言 (The Single Source of Truth)
# ============================================================
SUPPORTED_LANGUAGES: dict[str, LanguageInfo] = {
    "en": {"name": "English", "flag": "🇺🇸"},
    "ar": {"name": "Arabic", "flag": "🇸🇦"},
    "es": {"name": "Spanish", "flag": "🇪🇸"},
    "fr": {"name": "French", "flag": "🇫🇷"},
    "de": {"name": "German", "flag": "🇩🇪"},
    "it": {"name": "Italian", "flag": "🇮🇹"},
    "pt": {"name": "Portuguese", "flag": "🇵🇹"},
    "ru": {"name": "Russian", "flag": "🇷🇺"},
    "ja": {"name": "Japanese", "flag": "🇯🇵"},
    "ko": {"name": "Korean", "flag": "🇰🇷"},
    "zh": {"name": "Chinese", "flag": "🇨🇳"},
    "hi": {"name": "Hindi", "flag": "🇮🇳"},
}

_LATIN_EXTENDED = re.compile(r"^[A-Za-zÀ-ÖØ-öø-ÿ\s.,!?¡¿'\"-]+$")

# 目标语言期望的书写系统
SCRIPT_PATTERNS: dict[str, re.Pattern] = {
    "ar": re.compile(r"[\u0600-\u06ff]"),
    "en": re.compile(r"^[a-zA-Z\s.,!?'\"]+$"),
    "es": _LATIN_EXTENDED,
    "fr": _LATIN_EXTENDED,
    "de": _LATIN_EXTENDED,
    "it": _LATIN_EXTENDED,
    "pt": _LATIN_EXTENDED,
    "ru": re.compile(r"[\u0400-\u04ff]"),
    "ja": re.compile(r"[\u3040-\u309f\u30a0-\u30ff\u4e00-\u9fff]"),
    "ko": re.compile(r"[\uac00-\ud7af]"),
    "zh": re.compile(r"[\u4e00-\u9fff]"),
    "hi": re.compile(r"[\u0900-\u097f]"),
}

# 检测顺序很重要：日文混用汉字，需在中文之前判断假名
_DETECTION_ORDER: list[tuple[str, re.Pattern]] = [
    ("ar", re.compile(r"[\u0600-\u06ff]")),
    ("ja", re.compile(r"[\u3040-\u309f\u30a0-\u30ff]")),
    ("zh", re.compile(r"[\u4e00-\u9fff]")),
    ("ko", re.compile(r"[\uac00-\ud7af]")),
    ("ru", re.compile(r"[\u0400-\u04ff]")),
    ("hi", re.compile(r"[\u0900-\u097f]")),
]


def get_supported_languages() -> dict[str, LanguageInfo]:
    """获取支持语言列表（副本）"""
    return {code: dict(info) for code, info in SUPPORTED_LANGUAGES.items()}


def is_supported(code: str | None) -> bool:
    """判断语言代码是否受支持"""
    return bool(code) and code in SUPPORTED_LANGUAGES


def ensure_supported(code: str | None) -> str:
    """校验语言代码，不支持时抛出 UnsupportedLanguageError"""
    if not is_supported(code):
        raise UnsupportedLanguageError(str(code))
    return code


def matches_script(text: str, language: str) -> bool:
    """判断文本是否符合目标语言的书写系统"""
    pattern = SCRIPT_PATTERNS.get(language)
    if pattern is None or not text:
        return False
    return bool(pattern.search(text))


def detect_language(text: str) -> str:
    """基于字符集的简单语言检测，默认英文"""
    for code, pattern in _DETECTION_ORDER:
        if pattern.search(text):
            return code
    return "en"

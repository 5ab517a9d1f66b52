"""
langbook - translation dictionaries loaded from YAML files

Module-level functions use a shared default Translator that reads
LANG_ROOT_PATH, TRANSLATE_FALLBACK and DEFAULT_LANG at call time, so
assigning them (langbook.DEFAULT_LANG = "en") takes effect immediately.
"""

import threading
from typing import List, Optional

from langbook.config import (
    DEFAULT_LANG as _DEFAULT_LANG,
    DEFAULT_ROOT_PATH,
    DEFAULT_TRANSLATE_FALLBACK,
    TranslatorConfig,
    is_debug,
)
from langbook.lang_file import EMPTY_LANG_FILE, LangFile, LangFileFormatError
from langbook.lang_file import translate as _translate
from langbook.translator import Translator

LANG_ROOT_PATH = DEFAULT_ROOT_PATH
TRANSLATE_FALLBACK = DEFAULT_TRANSLATE_FALLBACK
DEFAULT_LANG = _DEFAULT_LANG

_default_translator: Optional[Translator] = None
_default_lock = threading.Lock()


def default_translator() -> Translator:
    """Shared translator backed by the module globals"""
    global _default_translator
    with _default_lock:
        if _default_translator is None:
            _default_translator = Translator(TranslatorConfig(
                root_path=lambda: LANG_ROOT_PATH,
                translate_fallback=lambda: TRANSLATE_FALLBACK,
                default_lang=lambda: DEFAULT_LANG,
            ))
    return _default_translator


def lang_files() -> List[LangFile]:
    return default_translator().lang_files()


def get_lang_file(lang: str) -> LangFile:
    return default_translator().get_lang_file(lang)


def translate(lang_file: Optional[LangFile], message: str) -> str:
    return _translate(lang_file, message)


__all__ = [
    "DEFAULT_LANG",
    "EMPTY_LANG_FILE",
    "LANG_ROOT_PATH",
    "LangFile",
    "LangFileFormatError",
    "TRANSLATE_FALLBACK",
    "Translator",
    "TranslatorConfig",
    "default_translator",
    "get_lang_file",
    "is_debug",
    "lang_files",
    "translate",
]

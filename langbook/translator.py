"""
Translator - loads per-language YAML dictionaries from a directory and caches them
- Lazy, once-per-code loading under a shared lock
- Family prefix fallback (en-us -> en) and default language fallback
- Debug mode bypasses every cache so edited files are picked up immediately
"""

import threading
from pathlib import Path
from typing import Callable, List, Optional, Union

import yaml

from langbook.config import TranslatorConfig
from langbook.lang_cache import LangCache, OnceCache
from langbook.lang_file import (
    EMPTY_LANG_FILE,
    LangFile,
    LangFileFormatError,
    family_prefix,
    normalize_lang,
)
from langbook.logger import Logger


class Translator:
    """Translation engine with its own cache and configuration"""

    def __init__(self, config: Optional[TranslatorConfig] = None, logger=None):
        self.config = config or TranslatorConfig()
        self.logger = logger or Logger().get_logger("langbook")

        # normalized code -> LangFile
        self._cache: LangCache[LangFile] = LangCache()

        # Every file of the root directory, computed once outside debug mode
        self._lang_files: OnceCache[List[LangFile]] = OnceCache()

        # One lock for every disk read, whatever the code
        self._load_lock = threading.Lock()

    @classmethod
    def with_values(cls, root_path: Union[str, Path], translate_fallback: bool, default_lang: str, logger=None) -> "Translator":
        """Translator with static settings; debug mode still follows the environment"""
        return cls(
            TranslatorConfig(
                root_path=root_path,
                translate_fallback=translate_fallback,
                default_lang=default_lang,
            ),
            logger=logger,
        )

    @classmethod
    def with_providers(
        cls,
        root_path: Callable[[], Union[str, Path]],
        translate_fallback: Callable[[], bool],
        default_lang: Callable[[], str],
        debug: Callable[[], bool],
        logger=None,
    ) -> "Translator":
        """Translator whose settings are re-read from the providers on every call"""
        return cls(
            TranslatorConfig(
                root_path=root_path,
                translate_fallback=translate_fallback,
                default_lang=default_lang,
                debug=debug,
            ),
            logger=logger,
        )

    # === Loading ===

    def _lang_path(self, lang: str) -> Path:
        return self.config.get_root_path() / f"{lang}.{self.config.get_file_extension()}"

    def _read_lang_file(self, lang: str) -> Optional[LangFile]:
        """Read and parse the document for one code, None when missing or malformed"""
        path = self._lang_path(lang)
        try:
            data = path.read_bytes()
        except OSError as e:
            self.logger.debug(f"[Translator.load_lang_file] {{{lang}}} not readable at {path}: {e}")
            return None

        try:
            return LangFile.from_yaml(data, translator=self)
        except (yaml.YAMLError, UnicodeDecodeError, LangFileFormatError) as e:
            self.logger.warning(f"[Translator.load_lang_file] Malformed language file {path}: {e}")
            return None

    def load_lang_file(self, lang: str) -> Optional[LangFile]:
        """
        Load the entry for a code, falling back to its family prefix.
        Returns None when neither document can be read.
        """
        lang = normalize_lang(lang)
        family = family_prefix(lang)

        if self.config.is_debug():
            self._cache.delete(lang)
            if family:
                self._cache.delete(family)

        lang_file = self._cache.get(lang)
        if lang_file is not None:
            return lang_file

        with self._load_lock:
            # Another caller may have loaded it while we waited
            lang_file = self._cache.get(lang)
            if lang_file is not None:
                return lang_file

            lang_file = self._read_lang_file(lang)
            if lang_file is not None:
                self._cache.set(lang, lang_file)
                return lang_file

            if family:
                lang_file = self._read_lang_file(family)
                if lang_file is not None:
                    self._cache.set(family, lang_file)
                    self._cache.set(lang, lang_file)
                    return lang_file

        return None

    # === Public API ===

    def get_lang_file(self, lang: str) -> LangFile:
        """Entry for a code, else the default language, else the empty entry"""
        lang_file = self.load_lang_file(lang)
        if lang_file is not None:
            return lang_file

        lang_file = self.load_lang_file(self.config.get_default_lang())
        if lang_file is not None:
            return lang_file

        return EMPTY_LANG_FILE

    def lang_files(self) -> List[LangFile]:
        """Every language file of the root directory, in listing order"""
        if self.config.is_debug():
            self.clear()
            return list(self._scan_lang_files())

        return list(self._lang_files.get_or_compute(self._scan_lang_files))

    def clear(self) -> None:
        """Drop all cached entries and the memoized file list"""
        with self._load_lock:
            count = self._cache.clear()
        self._lang_files.invalidate()
        self.logger.debug(f"[Translator] Cache cleared ({count} entries)")

    def _scan_lang_files(self) -> List[LangFile]:
        root_path = self.config.get_root_path()
        try:
            entries = list(root_path.iterdir())
        except OSError as e:
            self.logger.warning(f"[Translator.lang_files] Cannot list {root_path}: {e}")
            return []

        lang_files = []
        for entry in entries:
            if entry.is_dir():
                continue
            lang_file = self.load_lang_file(entry.name.split(".", 1)[0])
            if lang_file is not None:
                lang_files.append(lang_file)

        return lang_files

"""Loaded language resources and the key lookup with fallback."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, FrozenSet, Mapping, Optional, Union

import yaml

if TYPE_CHECKING:
    from langbook.translator import Translator


class LangFileFormatError(ValueError):
    """Document parsed as YAML but does not have the language file structure"""


def normalize_lang(lang: str) -> str:
    return (lang or "").lower()


def family_prefix(lang: str) -> str:
    """Part before the first '-', or '' when the code has no region"""
    lang = normalize_lang(lang)
    if "-" in lang:
        return lang.split("-", 1)[0]
    return ""


def _as_text(value: Any, field_name: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise LangFileFormatError(f"field '{field_name}' must be a scalar, got {type(value).__name__}")
    return str(value)


@dataclass(frozen=True)
class LangFile:
    version: str = ""
    lang: str = ""
    name: str = ""
    # Left out of the hash; entries hash on version, lang and name
    dictionary: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), hash=False)
    # Owning translator, only used to load fallback entries
    translator: Optional["Translator"] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_yaml(cls, data: Union[str, bytes], translator: Optional["Translator"] = None) -> "LangFile":
        """
        Parse a language document.
        Bytes are decoded as UTF-8 by the YAML reader.
        Raises yaml.YAMLError or LangFileFormatError for malformed input.
        """
        document = yaml.safe_load(data)
        if document is None:
            document = {}
        if not isinstance(document, dict):
            raise LangFileFormatError(f"document must be a mapping, got {type(document).__name__}")

        raw_dict = document.get("dict")
        if raw_dict is None:
            raw_dict = {}
        if not isinstance(raw_dict, dict):
            raise LangFileFormatError(f"field 'dict' must be a mapping, got {type(raw_dict).__name__}")

        entries = {str(key): _as_text(value, f"dict.{key}") for key, value in raw_dict.items()}

        return cls(
            version=_as_text(document.get("version"), "version"),
            lang=_as_text(document.get("lang"), "lang"),
            name=_as_text(document.get("name"), "name"),
            dictionary=MappingProxyType(entries),
            translator=translator,
        )

    def translate(self, message: str) -> str:
        """Best available translation of `message`, or `message` itself."""
        return self._translate(message, frozenset())

    def _translate(self, message: str, visited: FrozenSet[str]) -> str:
        if message in self.dictionary:
            return self.dictionary[message]

        translator = self.translator
        if translator is None:
            return message

        # Declared codes already tried in this lookup; keeps the chain finite
        visited = visited | {self.lang}

        family = family_prefix(self.lang)
        if family:
            family_file = translator.load_lang_file(family)
            if family_file is not None and family_file.lang not in visited:
                return family_file._translate(message, visited)

        if translator.config.is_fallback_enabled():
            default_file = translator.get_lang_file(translator.config.get_default_lang())
            # Compared on the codes declared inside the documents, not the lookup keys
            if self.lang != default_file.lang and default_file.lang not in visited:
                return default_file._translate(message, visited)

        return message


EMPTY_LANG_FILE = LangFile()


def translate(lang_file: Optional[LangFile], message: str) -> str:
    """Translate `message` with `lang_file`; a missing entry returns the message unchanged."""
    if lang_file is None:
        return message
    return lang_file.translate(message)

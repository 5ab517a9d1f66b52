"""Configuration for translators.

Every value of a TranslatorConfig may be given either as a plain value or as a
zero-argument callable. Callables are evaluated on each access, so the owning
translator follows changes made after construction.
"""

import os
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml
from dotenv import load_dotenv

DEFAULT_ROOT_PATH = "./resources/translation"
DEFAULT_TRANSLATE_FALLBACK = True
DEFAULT_LANG = "zh-tw"
DEFAULT_FILE_EXTENSION = "yaml"

# The primary variable wins whenever it holds a value
DEBUG_ENV = "APP_DEBUG"
LEGACY_DEBUG_ENV = "KKAPP_DEBUG"

SETTINGS_SECTION = "translation"


def is_debug() -> bool:
    """Debug mode from the environment, enabled only by a case-insensitive "true"."""
    value = os.environ.get(DEBUG_ENV, "")
    if not value:
        value = os.environ.get(LEGACY_DEBUG_ENV, "")
    return value.upper() == "TRUE"


def _as_bool(value: Any) -> bool:
    """Settings flag; strings count as true only for a case-insensitive "true"."""
    if isinstance(value, str):
        return value.strip().upper() == "TRUE"
    return bool(value)


def _provider(value: Any) -> Callable[[], Any]:
    if callable(value):
        return value
    return lambda: value


class TranslatorConfig:
    """Current-value accessors for root path, default language, fallback and debug flags."""

    def __init__(
        self,
        root_path: Union[str, Path, Callable[[], Union[str, Path]]] = DEFAULT_ROOT_PATH,
        translate_fallback: Union[bool, Callable[[], bool]] = DEFAULT_TRANSLATE_FALLBACK,
        default_lang: Union[str, Callable[[], str]] = DEFAULT_LANG,
        debug: Optional[Union[bool, Callable[[], bool]]] = None,
        file_extension: Union[str, Callable[[], str]] = DEFAULT_FILE_EXTENSION,
    ):
        self._root_path = _provider(root_path)
        self._translate_fallback = _provider(translate_fallback)
        self._default_lang = _provider(default_lang)
        self._debug = _provider(debug) if debug is not None else is_debug
        self._file_extension = _provider(file_extension)

    def get_root_path(self) -> Path:
        return Path(self._root_path())

    def get_default_lang(self) -> str:
        return self._default_lang()

    def is_fallback_enabled(self) -> bool:
        return bool(self._translate_fallback())

    def is_debug(self) -> bool:
        return bool(self._debug())

    def get_file_extension(self) -> str:
        return str(self._file_extension()).lstrip(".")

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path], env_file: Optional[Union[str, Path]] = None) -> "TranslatorConfig":
        """
        Build a config from the `translation` section of a settings file.
        Missing file or keys fall back to defaults; .env next to the file is loaded
        so the debug variables can be set there.
        """
        config_path = Path(config_path)
        load_dotenv(env_file if env_file is not None else config_path.parent / ".env")

        settings = SettingsFile(config_path)
        root_path = settings.get(f"{SETTINGS_SECTION}.root_path", DEFAULT_ROOT_PATH)

        # Relative roots are taken from the settings file location
        root = Path(root_path)
        if not root.is_absolute():
            root = config_path.parent / root

        return cls(
            root_path=root,
            translate_fallback=_as_bool(settings.get(f"{SETTINGS_SECTION}.fallback", DEFAULT_TRANSLATE_FALLBACK)),
            default_lang=str(settings.get(f"{SETTINGS_SECTION}.default_lang", DEFAULT_LANG)),
            file_extension=str(settings.get(f"{SETTINGS_SECTION}.file_extension", DEFAULT_FILE_EXTENSION)),
        )


class SettingsFile:
    """Read-only view of a YAML settings file."""

    def __init__(self, config_path: Union[str, Path]):
        self.config_path = Path(config_path)
        self.config: dict = {}
        self._load_config()

    def _load_config(self) -> None:
        if not self.config_path.exists():
            return

        with open(self.config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        self.config = loaded if isinstance(loaded, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated key path."""
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

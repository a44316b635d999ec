"""
Language preference carried as an explicit context object

The preference is persisted through whatever key-value store is injected:
an in-memory dict on the server and in tests, Streamlit's session state
in the dashboard.
"""
import json
from enum import StrEnum
from functools import lru_cache
from typing import Dict, MutableMapping, Optional, Protocol

from pos_backend.core.i18n_logger import LOCALES_DIR

LANGUAGE_STORE_KEY = "restaurant-language"


class Language(StrEnum):
    ENGLISH = "en"
    TAMIL = "ta"


class KeyValueStore(Protocol):
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._data.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class MappingStore:
    """Adapts any mutable mapping (e.g. st.session_state) to KeyValueStore"""

    def __init__(self, mapping: MutableMapping):
        self._mapping = mapping

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._mapping.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._mapping[key] = value


@lru_cache(maxsize=None)
def load_ui_strings(language: str) -> Dict[str, str]:
    """UI string table for a language: English text -> translation"""
    path = LOCALES_DIR / f"{language}.json"
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f).get("ui", {})


def parse_language(value: Optional[str], default: Language = Language.ENGLISH) -> Language:
    try:
        return Language(value) if value else default
    except ValueError:
        return default


class LanguageContext:
    """
    Current language plus the translate function.

    Example:
        ctx = LanguageContext(InMemoryStore())
        ctx.set_language("ta")
        ctx.t("Subtotal")          # looked up in locales/ta.json
        ctx.t("Online", "ஆன்லைன்")  # explicit Tamil wins
    """

    def __init__(self, store: KeyValueStore, default: Language = Language.ENGLISH):
        self.store = store
        self._language = parse_language(store.get(LANGUAGE_STORE_KEY), default)

    @property
    def language(self) -> Language:
        return self._language

    def set_language(self, language: str) -> None:
        self._language = parse_language(language, self._language)
        self.store.set(LANGUAGE_STORE_KEY, self._language.value)

    def toggle_language(self) -> Language:
        self.set_language(
            Language.TAMIL if self._language == Language.ENGLISH else Language.ENGLISH
        )
        return self._language

    def t(self, english_text: str, tamil_text: Optional[str] = None) -> str:
        """Translate English text; unknown strings come back unchanged"""
        if self._language == Language.TAMIL:
            if tamil_text:
                return tamil_text
            return load_ui_strings(Language.TAMIL.value).get(english_text, english_text)
        return english_text

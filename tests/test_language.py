from pos_backend.core.language import (
    LANGUAGE_STORE_KEY, InMemoryStore, Language, LanguageContext, MappingStore
)


def test_defaults_to_english_and_returns_source_text():
    ctx = LanguageContext(InMemoryStore())
    assert ctx.language == Language.ENGLISH
    assert ctx.t("Subtotal", "மொத்தம்") == "Subtotal"


def test_tamil_uses_explicit_translation_then_locale_table():
    ctx = LanguageContext(InMemoryStore())
    ctx.set_language("ta")
    assert ctx.t("Online", "ஆன்லைன்") == "ஆன்லைன்"
    assert ctx.t("Subtotal") == "மொத்தம்"
    assert ctx.t("Tax (5%)") == "வரி (5%)"


def test_missing_translation_falls_back_to_english():
    ctx = LanguageContext(InMemoryStore({LANGUAGE_STORE_KEY: "ta"}))
    assert ctx.t("Kitchen display") == "Kitchen display"


def test_preference_persists_through_store():
    store = InMemoryStore()
    LanguageContext(store).set_language("ta")
    assert store.get(LANGUAGE_STORE_KEY) == "ta"
    assert LanguageContext(store).language == Language.TAMIL


def test_toggle_switches_between_languages():
    session = {}
    ctx = LanguageContext(MappingStore(session))
    assert ctx.toggle_language() == Language.TAMIL
    assert session[LANGUAGE_STORE_KEY] == "ta"
    assert ctx.toggle_language() == Language.ENGLISH
    assert session[LANGUAGE_STORE_KEY] == "en"


def test_unknown_stored_language_is_ignored():
    ctx = LanguageContext(InMemoryStore({LANGUAGE_STORE_KEY: "fr"}))
    assert ctx.language == Language.ENGLISH
    ctx.set_language("de")
    assert ctx.language == Language.ENGLISH

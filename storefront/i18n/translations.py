"""User-facing cart messages."""

import os

SUPPORTED_LANGUAGES = {
    "pt": "Português",
    "en": "English",
}

DEFAULT_LANGUAGE = os.environ.get("CART_LANGUAGE", "pt")

_translations: dict[str, dict[str, str]] = {
    "pt": {
        "insufficient_stock": "Quantidade solicitada fora de estoque",
        "add_product_failed": "Erro na adição do produto",
        "remove_product_failed": "Erro na remoção do produto",
        "update_amount_failed": "Erro na alteração de quantidade do produto",
    },
    "en": {
        "insufficient_stock": "Requested amount is out of stock",
        "add_product_failed": "Could not add the product",
        "remove_product_failed": "Could not remove the product",
        "update_amount_failed": "Could not change the product amount",
    },
}


def get_text(key: str, lang: str | None = None) -> str:
    """Get message in the given language, falling back to the default, then the key."""
    lang = (lang or DEFAULT_LANGUAGE).split("-")[0].lower()
    messages = _translations.get(lang) or _translations.get(DEFAULT_LANGUAGE, {})
    if key in messages:
        return messages[key]
    return _translations.get(DEFAULT_LANGUAGE, {}).get(key, key)

"""
String Catalog

Looks up localized strings by dotted key ("crudpanel.equal",
"validation.required"). Built-in English strings can be overridden or
extended per locale with YAML files placed in ``Settings.translations_dir``:

    # translations/fa.yaml
    crudpanel:
      equal: "برابر"
    validation:
      required: ":attribute الزامی است."

Placeholders use the ``:name`` form and are filled from keyword arguments.
Unknown keys resolve to the key itself.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from crudpanel.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_STRINGS: dict[str, Any] = {
    "crudpanel": {
        "is_empty": "Is empty",
        "is_not_empty": "Is not empty",
        "equal": "Equal",
        "not_equal": "Not equal",
        "similar": "Similar",
        "not_similar": "Not similar",
    },
    "validation": {
        "required": ":attribute is required.",
        "string": ":attribute must be a string.",
        "integer": ":attribute must be an integer.",
        "numeric": ":attribute must be a number.",
        "boolean": ":attribute must be true or false.",
        "array": ":attribute must be a list.",
        "email": ":attribute must be a valid email address.",
        "in": "The selected :attribute is invalid.",
        "min": {
            "numeric": ":attribute must be at least :min.",
            "string": ":attribute must be at least :min characters.",
            "array": ":attribute must have at least :min items.",
        },
        "max": {
            "numeric": ":attribute may not be greater than :max.",
            "string": ":attribute may not be greater than :max characters.",
            "array": ":attribute may not have more than :max items.",
        },
        "invalid": ":attribute is invalid.",
    },
}


def _flatten(tree: dict[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in tree.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = str(value)
    return flat


@lru_cache
def load_catalog(locale: str, translations_dir: Path | None = None) -> dict[str, str]:
    """
    Load the flattened catalog for a locale.

    The catalog is cached per (locale, directory); call
    ``load_catalog.cache_clear()`` after editing catalog files.

    Args:
        locale: Locale code, also the YAML file stem
        translations_dir: Directory to read ``<locale>.yaml`` from

    Returns:
        Mapping of dotted key to localized string
    """
    catalog = _flatten(DEFAULT_STRINGS) if locale == "en" else {}
    if translations_dir is None:
        return catalog

    path = Path(translations_dir) / f"{locale}.yaml"
    if not path.is_file():
        logger.warning(f"No translation catalog for locale '{locale}' at {path}")
        return catalog

    with path.open(encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring translation catalog {path}: top level is not a mapping")
        return catalog

    catalog.update(_flatten(data))
    logger.debug(f"Loaded {len(catalog)} strings for locale '{locale}'")
    return catalog


def trans(key: str, locale: str | None = None, **replace: Any) -> str:
    """
    Translate a dotted key.

    Args:
        key: Dotted key such as "crudpanel.equal"
        locale: Locale override (defaults to Settings.locale)
        **replace: Values for ``:name`` placeholders

    Returns:
        Localized string, or the key itself when no catalog defines it
    """
    settings = get_settings()
    locale = locale or settings.locale

    text = load_catalog(locale, settings.translations_dir).get(key)
    if text is None and settings.fallback_locale != locale:
        text = load_catalog(settings.fallback_locale, settings.translations_dir).get(key)
    if text is None:
        return key

    # Longest names first so ":max" does not clobber ":maximum"
    for name in sorted(replace, key=len, reverse=True):
        text = text.replace(f":{name}", str(replace[name]))
    return text

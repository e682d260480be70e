"""
Localized values
================

A localized field holds a ``{locale: text}`` mapping. Handlers resolve it to
a single string before handing data to the rendering step.
"""

from typing import Dict, Optional

LocalizedText = Dict[str, str]
"""Mapping of locale code to text, e.g. ``{"en": "News", "fr": "Nouvelles"}``."""


def localize(values: Optional[LocalizedText], locale: str, fallback_locale: Optional[str] = None) -> Optional[str]:
    """
    Pick the value of a localized field for a locale.

    Parameters
    ----------
    values : dict[str, str] | None
        The localized field.
    locale : str
        Requested locale.
    fallback_locale : str | None
        Locale tried when the requested one has no value, usually the
        journal's primary locale.

    Returns
    -------
    str | None
        The first non-empty value among the requested locale, the fallback
        locale and any other locale (sorted by code); None if there is none.
    """
    if not values:
        return None
    for candidate in (locale, fallback_locale):
        if candidate and values.get(candidate):
            return values[candidate]
    for candidate in sorted(values):
        if values[candidate]:
            return values[candidate]
    return None

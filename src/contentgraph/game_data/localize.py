"""
Localization of table columns.

Copies a text column of a source row into per-locale variants on a target
entity. Source values are either a plain string, which only fills the
default locale, or a ``{locale: text}`` mapping.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol

from .service import GameDataService


class LocalizedTarget(Protocol):
    """Anything holding a ``localized`` locale -> field -> text mapping."""

    localized: Dict[str, Dict[str, str]]


def capitalize_words(text: str) -> str:
    """Capitalize the first letter of every space separated word."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


class Localizer:
    """Fills localized fields on build entities."""

    def __init__(self, locales: List[str]):
        if not locales:
            raise ValueError("At least one locale is required")
        self.locales = list(locales)

    @property
    def default_locale(self) -> str:
        return self.locales[0]

    def column(
        self,
        target: LocalizedTarget,
        row: Dict[str, Any],
        source_field: str,
        dest_field: str,
        transform: Optional[Callable[[str], str]] = None,
    ) -> None:
        """Copy ``row[source_field]`` into ``target.localized[locale][dest_field]``.

        Locales with no text are left untouched.
        """
        value = row.get(source_field)
        if isinstance(value, dict):
            per_locale = {
                locale: GameDataService.extract_clean_name(value, locale)
                for locale in self.locales
            }
        else:
            per_locale = {
                self.default_locale: GameDataService.extract_clean_name(value, self.default_locale)
            }

        for locale, text in per_locale.items():
            if not text:
                continue
            if transform is not None:
                text = transform(text)
            target.localized.setdefault(locale, {})[dest_field] = text

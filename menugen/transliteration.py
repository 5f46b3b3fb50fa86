"""
Transliteration for Menugen.

Folds text to its ASCII base characters so that menu keys written in any
script can be turned into machine names. Language-specific replacements run
first (German umlauts become two letters, for instance); everything else goes
through Unidecode's transliteration tables, so "Меню" becomes "Meniu".
"""

from typing import Dict

from unidecode import unidecode


LANGUAGE_OVERRIDES: Dict[str, Dict[str, str]] = {
    "de": {
        "Ä": "Ae", "ä": "ae",
        "Ö": "Oe", "ö": "oe",
        "Ü": "Ue", "ü": "ue",
    },
    "da": {
        "Å": "Aa", "å": "aa",
        "Æ": "Ae", "æ": "ae",
        "Ø": "Oe", "ø": "oe",
    },
    "nb": {
        "Å": "Aa", "å": "aa",
        "Æ": "Ae", "æ": "ae",
        "Ø": "Oe", "ø": "oe",
    },
    "sv": {
        "Å": "Aa", "å": "aa",
        "Ä": "Ae", "ä": "ae",
        "Ö": "Oe", "ö": "oe",
    },
    "eo": {
        "Ĉ": "Cx", "ĉ": "cx",
        "Ĝ": "Gx", "ĝ": "gx",
        "Ĥ": "Hx", "ĥ": "hx",
        "Ĵ": "Jx", "ĵ": "jx",
        "Ŝ": "Sx", "ŝ": "sx",
        "Ŭ": "Ux", "ŭ": "ux",
    },
}


class Transliterator:
    """
    Folds Unicode text into ASCII.
    """

    def __init__(self, overrides: Dict[str, Dict[str, str]] = None):
        """
        Initialize the transliterator.

        Args:
            overrides: Per-language replacement tables; defaults to LANGUAGE_OVERRIDES
        """
        self.overrides = LANGUAGE_OVERRIDES if overrides is None else overrides

    def transliterate(self, text: str, langcode: str = "en", unknown_character: str = "?") -> str:
        """
        Transliterate text to ASCII.

        Args:
            text: The text to transliterate
            langcode: Language code selecting the override table, e.g. "de" or "de-CH"
            unknown_character: Replacement for characters with no ASCII form

        Returns:
            The ASCII text
        """
        table = self._table_for(langcode)
        result = []

        for char in text:
            if char in table:
                result.append(table[char])
                continue
            if char.isascii():
                result.append(char)
                continue

            result.append(unidecode(char, errors="replace", replace_str=unknown_character))

        return "".join(result)

    def _table_for(self, langcode: str) -> Dict[str, str]:
        if not langcode:
            return {}
        if langcode in self.overrides:
            return self.overrides[langcode]
        # Fall back from a regional code to its base language
        base_language = langcode.replace("_", "-").split("-")[0].lower()
        return self.overrides.get(base_language, {})

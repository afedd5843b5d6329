import re
import string
import unicodedata

from app.services.engines.alphabet import unique_symbols

MAX_LETTERS_IN_KEY = 12


class TextNormalizer:
    """
    Cleans user-entered keys and words before they reach the ciphers.

    Handles:
    - Case conversion
    - Whitespace removal
    - Diacritic stripping
    - Duplicate letter removal
    - Restriction to an allowed alphabet
    - Truncation
    """

    ALPHABETS = {
        "english": string.ascii_uppercase,
        "extended": string.ascii_uppercase + string.digits,
    }

    def __init__(self, alphabet: str = "english"):
        """Initialize normalizer with specified alphabet."""
        self.alphabet = self.ALPHABETS.get(alphabet, alphabet.upper())

    def clean_text(
        self,
        text: str,
        max_length: int | None = None,
        allowed: str | None = None,
        remove_duplicates: bool = False,
    ) -> str:
        """
        Clean a key or word.

        Args:
            text: Text to clean
            max_length: Keep at most this many characters
            allowed: Characters to keep; defaults to the normalizer's alphabet
            remove_duplicates: Drop repeated letters (APPLE -> APLE)

        Returns:
            The cleaned text
        """
        cleaned = self.strip_whitespace(text.upper())
        if not cleaned:
            return cleaned

        cleaned = self.remove_diacritics(cleaned)

        if remove_duplicates:
            cleaned = self.remove_duplicate_letters(cleaned)

        allowed_set = set(self.alphabet if allowed is None else allowed)
        cleaned = "".join(c for c in cleaned if c in allowed_set)

        if max_length is not None:
            cleaned = cleaned[:max_length]
        return cleaned

    def clean_keyword(self, keyword: str, max_length: int = MAX_LETTERS_IN_KEY) -> str:
        """Clean a keyword: uppercase letters, no repeats, at most ``max_length``."""
        return self.clean_text(keyword, max_length=max_length, remove_duplicates=True)

    def remove_diacritics(self, text: str) -> str:
        """Strip accents, e.g. 'MŸ NÂME' -> 'MY NAME'."""
        decomposed = unicodedata.normalize("NFKD", text)
        return "".join(c for c in decomposed if not unicodedata.combining(c))

    def remove_duplicate_letters(self, text: str) -> str:
        return "".join(unique_symbols(text))

    def strip_whitespace(self, text: str) -> str:
        """Remove all whitespace from text."""
        return re.sub(r"\s+", "", text)

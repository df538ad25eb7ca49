"""Turn raw text into a sequence of normalised terms.

Tokenisation, lowercasing, accent stripping and stop-word removal are done
by scikit-learn's word analyzer; each surviving token is then reduced with
the Porter stemmer, so "Running cats" becomes ``["run", "cat"]``.
"""

from collections.abc import Callable
from functools import lru_cache

from nltk.stem import PorterStemmer
from sklearn.feature_extraction.text import CountVectorizer

# Either two-or-more word characters or a single digit, so "type 1 diabetes"
# keeps its "1".
TOKEN_PATTERN = r"(?u)\b(?:\w\w+|\d)\b"


class TextAnalyzer:
    """Callable text -> term list. Pure: the same text always yields the same terms."""

    def __init__(
        self,
        stop_words: str | list[str] | None = "english",
        stem: bool = True,
        token_pattern: str = TOKEN_PATTERN,
    ) -> None:
        self.stop_words = stop_words
        self.stem = stem
        self._analyze: Callable[[str], list[str]] = CountVectorizer(
            lowercase=True,
            strip_accents="unicode",
            stop_words=stop_words,
            token_pattern=token_pattern,
        ).build_analyzer()
        self._stemmer = PorterStemmer() if stem else None

    def __call__(self, text: str) -> list[str]:
        tokens = self._analyze(text)
        if self._stemmer is None:
            return tokens
        return [self._stemmer.stem(token) for token in tokens]

    def __repr__(self) -> str:
        return f"TextAnalyzer(stop_words={self.stop_words!r}, stem={self.stem})"


@lru_cache(maxsize=1)
def default_analyzer() -> TextAnalyzer:
    return TextAnalyzer()


def preprocess(text: str) -> list[str]:
    """Analyse *text* with the shared default :class:`TextAnalyzer`."""
    return default_analyzer()(text)

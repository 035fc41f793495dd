"""Keyword extraction for post tags."""

from functools import cache
from logging import getLogger
from re import compile as re_compile

import nltk
from nltk.corpus import stopwords

from app.configs import file_logger

logger = file_logger(getLogger(__name__))

# Anything that is not an ASCII letter, digit or space becomes a space, so
# punctuation separates words instead of gluing them together.
_NON_WORD = re_compile(r"[^A-Za-z0-9 ]")


@cache
def english_stop_words() -> frozenset[str]:
    """
    English stop words from the NLTK corpus.

    The corpus is downloaded on first use if it is not installed.

    Returns:
        frozenset[str]: Lower-case stop words
    """
    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        logger.info("Downloading NLTK stopwords corpus")
        nltk.download("stopwords", quiet=True)
    return frozenset(stopwords.words("english"))


def extract_keywords(
    text: str,
    stop_words: frozenset[str] | None = None,
) -> list[str]:
    """
    Extract tag keywords from free text.

    Non-alphanumeric characters are replaced by spaces, digit-only tokens are
    dropped, the rest are lower-cased, de-duplicated in first-seen order and
    filtered against `stop_words`.

    Args:
        text: Free text (post content)
        stop_words: Lower-case words to discard (defaults to
            `english_stop_words()`)

    Returns:
        list[str]: Keywords in order of first appearance

    Examples:
    --------
    >>> extract_keywords("The quick Brown fox 123")
    ['quick', 'brown', 'fox']
    >>> extract_keywords("Go GO go")
    ['go']
    """
    if stop_words is None:
        stop_words = english_stop_words()
    seen: set[str] = set()
    keywords: list[str] = []
    for token in _NON_WORD.sub(" ", text).split():
        if token.isdigit():
            continue
        word = token.lower()
        if word in seen or word in stop_words:
            continue
        seen.add(word)
        keywords.append(word)
    return keywords

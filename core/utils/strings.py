import base64
import re
import unicodedata

_WORD_SEPARATOR_REGEXP = re.compile(r"[\s\-_]+|(?<=[a-z0-9])(?=[A-Z])")
_NON_SLUG_CHARS_REGEXP = re.compile(r"[^a-z0-9]")


def remove_accents(s: str) -> str:
    """Decompose accented characters and drop anything that is not ascii"""
    return unicodedata.normalize("NFKD", s).encode("ascii", "ignore").decode("ascii")


def split_words(s: str) -> list[str]:
    return [w for w in _WORD_SEPARATOR_REGEXP.split(s) if w]


def slugify(s: str) -> str:
    words = (_NON_SLUG_CHARS_REGEXP.sub("", w.lower()) for w in split_words(remove_accents(s)))
    return "-".join(w for w in words if w)


def slugify_title(title: str) -> str:
    """Build the url slug of a dashboard title

    Titles made only of characters that cannot be slugified fall back to their unpadded
    url safe base64 encoding so that the slug is never empty for a non empty title.
    """
    slug = slugify(title.lower())
    if slug:
        return slug
    return base64.urlsafe_b64encode(title.encode()).decode().rstrip("=")

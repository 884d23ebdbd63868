from __future__ import annotations

from typing import Optional

from .errors import ValidationError

TITLE_MAX_LENGTH = 200
TITLE_ERROR = f"Title is required and must be <= {TITLE_MAX_LENGTH} characters."
TITLE_ENCODING_ERROR = "Title must be valid UTF-8 text."


# PUBLIC_INTERFACE
def validate_title(title: Optional[str]) -> str:
    """
    Check a candidate title for create and update requests.

    The title must be present, contain at least one non-whitespace character,
    be at most TITLE_MAX_LENGTH characters long and be encodable as UTF-8
    (JSON escapes can smuggle in lone surrogates). It is returned unchanged.

    Raises:
        ValidationError: the title breaks any of the rules above.
    """
    if title is None or not title.strip() or len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(TITLE_ERROR)
    try:
        title.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError(TITLE_ENCODING_ERROR) from e
    return title

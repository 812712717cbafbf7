from typing import Any

from pydantic import ValidationError

from herero_dictionary.words.constants import (
    EntryKind,
    FLAT_REQUIRED_FIELDS_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    RICH_ENTRY_FIELDS,
)

# Error types that mean a required field is absent or empty
MISSING_ERROR_TYPES = {"missing", "too_short", "blank"}


def normalize_word(word: str) -> str:
    """Trim and lower-case a word so it can be used as the entry key"""
    return word.strip().lower()


def entry_kind_of(body: Any) -> str:
    """
    Pick the entry kind a request body describes.

    An explicit ``kind`` wins; otherwise a body carrying a pronunciation or
    a definitions list is a rich entry and anything else is flat.
    """
    if isinstance(body, dict):
        kind = body.get("kind")
        if kind in (EntryKind.RICH.value, EntryKind.FLAT.value):
            return kind
        if any(field in body for field in RICH_ENTRY_FIELDS):
            return EntryKind.RICH.value
        return EntryKind.FLAT.value
    return getattr(body, "kind", EntryKind.FLAT.value)


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into one human-readable line"""
    tags = {kind.value for kind in EntryKind}
    parts = []
    for error in exc.errors():
        loc = [str(p) for p in error.get("loc", ())]
        if loc and loc[0] in tags:
            loc = loc[1:]
        location = ".".join(loc)
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def entry_validation_message(exc: ValidationError, kind: str) -> str:
    """
    Message for a rejected entry body. Missing or empty required fields get
    the kind's fixed message; anything else is described field by field.
    """
    if any(error["type"] in MISSING_ERROR_TYPES for error in exc.errors()):
        if kind == EntryKind.RICH.value:
            return REQUIRED_FIELDS_MESSAGE
        return FLAT_REQUIRED_FIELDS_MESSAGE
    return describe_validation_error(exc)

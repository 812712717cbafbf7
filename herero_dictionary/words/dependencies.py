from typing import Any, Dict, Union

from fastapi import Body, Path
from pydantic import ValidationError

from herero_dictionary.words.exceptions import WordValidationException
from herero_dictionary.words.schemas import FlatEntryCreate, RichEntryCreate, word_entry_create_adapter
from herero_dictionary.words.service import WordService
from herero_dictionary.words.utils import entry_kind_of, entry_validation_message, normalize_word

def get_word_service() -> WordService:
    """Get WordService instance"""
    return WordService()

def get_word_key(word: str = Path(..., description="Word, matched case-insensitively")) -> str:
    """Normalize the word path segment to the stored key"""
    return normalize_word(word)

def valid_entry_create(
    body: Dict[str, Any] = Body(..., description="Rich or flat entry fields")
) -> Union[RichEntryCreate, FlatEntryCreate]:
    """
    Validate a create body as a rich or flat entry

    Raises:
        WordValidationException: If required fields are missing or invalid
    """
    try:
        return word_entry_create_adapter.validate_python(body)
    except ValidationError as e:
        raise WordValidationException(entry_validation_message(e, entry_kind_of(body)))

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Discriminator, Field, Tag, TypeAdapter, validator
from pydantic_core import PydanticCustomError

from herero_dictionary.models import CustomModel
from herero_dictionary.words.constants import EntryKind, PartOfSpeech
from herero_dictionary.words.utils import entry_kind_of, normalize_word

# Constants for field descriptions
WORD_DESCRIPTION = "Headword, stored trimmed and lower-cased"
DATE_ADDED_DESCRIPTION = "Creation time"
LAST_MODIFIED_DESCRIPTION = "Time of the last successful change"


def _required_text(v: Optional[str], field_name: str) -> str:
    if v is None or not v.strip():
        raise PydanticCustomError("blank", "{field_name} must not be empty", {"field_name": field_name})
    return v.strip()


def _optional_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    return v.strip() or None


class DefinitionCreate(CustomModel):
    type: str = Field(..., max_length=64, description="Grammatical category, e.g. verb")
    definition: str = Field(..., description="Gloss")
    example: Optional[str] = Field(None, description="Usage example")

    @validator('type')
    def validate_type(cls, v):
        return _required_text(v, 'Definition type')

    @validator('definition')
    def validate_definition(cls, v):
        return _required_text(v, 'Definition')

    @validator('example')
    def validate_example(cls, v):
        return _optional_text(v)


class RichEntryCreate(CustomModel):
    """Multi-definition entry; also the full-replace body for rich entries"""
    kind: Literal["rich"] = EntryKind.RICH.value
    word: str = Field(..., max_length=255, description=WORD_DESCRIPTION)
    pronunciation: str = Field(..., max_length=255, description="Phonetic hint")
    definitions: List[DefinitionCreate] = Field(..., min_length=1, description="At least one definition")

    @validator('word')
    def validate_word(cls, v):
        return normalize_word(_required_text(v, 'Word'))

    @validator('pronunciation')
    def validate_pronunciation(cls, v):
        return _required_text(v, 'Pronunciation')


class FlatEntryCreate(CustomModel):
    """Single-definition entry"""
    kind: Literal["flat"] = EntryKind.FLAT.value
    word: str = Field(..., max_length=255, description=WORD_DESCRIPTION)
    definition: str = Field(..., description="Gloss")
    part_of_speech: Optional[PartOfSpeech] = Field(None, description="Grammatical category")
    example: Optional[str] = Field(None, description="Usage example")
    etymology: Optional[str] = Field(None, description="Word origin")

    @validator('word')
    def validate_word(cls, v):
        return normalize_word(_required_text(v, 'Word'))

    @validator('definition')
    def validate_definition(cls, v):
        return _required_text(v, 'Definition')

    @validator('example', 'etymology')
    def validate_optional_text(cls, v):
        return _optional_text(v)


class FlatEntryUpdate(CustomModel):
    """Partial update for flat entries; only provided fields are applied"""
    kind: Optional[Literal["flat"]] = None
    word: Optional[str] = Field(None, max_length=255, description=WORD_DESCRIPTION)
    definition: Optional[str] = Field(None, description="Gloss")
    part_of_speech: Optional[PartOfSpeech] = Field(None, description="Grammatical category")
    example: Optional[str] = Field(None, description="Usage example")
    etymology: Optional[str] = Field(None, description="Word origin")

    @validator('word')
    def validate_word(cls, v):
        return normalize_word(_required_text(v, 'Word'))

    @validator('definition')
    def validate_definition(cls, v):
        return _required_text(v, 'Definition')

    @validator('example', 'etymology')
    def validate_optional_text(cls, v):
        return _optional_text(v)


WordEntryCreate = Annotated[
    Union[
        Annotated[RichEntryCreate, Tag(EntryKind.RICH.value)],
        Annotated[FlatEntryCreate, Tag(EntryKind.FLAT.value)],
    ],
    Discriminator(entry_kind_of),
]

word_entry_create_adapter = TypeAdapter(WordEntryCreate)


class DefinitionResponse(CustomModel):
    type: str
    definition: str
    example: Optional[str] = None


class RichEntryResponse(CustomModel):
    kind: Literal["rich"] = EntryKind.RICH.value
    word: str = Field(..., description=WORD_DESCRIPTION)
    pronunciation: str
    definitions: List[DefinitionResponse]
    date_added: datetime = Field(..., description=DATE_ADDED_DESCRIPTION)
    last_modified: datetime = Field(..., description=LAST_MODIFIED_DESCRIPTION)


class FlatEntryResponse(CustomModel):
    kind: Literal["flat"] = EntryKind.FLAT.value
    word: str = Field(..., description=WORD_DESCRIPTION)
    definition: str
    part_of_speech: Optional[PartOfSpeech] = None
    example: Optional[str] = None
    etymology: Optional[str] = None
    date_added: datetime = Field(..., description=DATE_ADDED_DESCRIPTION)
    last_modified: datetime = Field(..., description=LAST_MODIFIED_DESCRIPTION)


WordEntryResponse = Union[RichEntryResponse, FlatEntryResponse]


class MessageResponse(CustomModel):
    message: str

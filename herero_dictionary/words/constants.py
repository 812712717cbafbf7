from enum import Enum


class EntryKind(str, Enum):
    RICH = "rich"  # pronunciation + ordered definitions
    FLAT = "flat"  # single definition with part of speech


class PartOfSpeech(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PRONOUN = "pronoun"
    PREPOSITION = "preposition"
    CONJUNCTION = "conjunction"
    INTERJECTION = "interjection"


# Keys in a request body that mark it as a rich entry
RICH_ENTRY_FIELDS = ("pronunciation", "definitions")

REQUIRED_FIELDS_MESSAGE = "Word, pronunciation, and at least one definition are required"
WORD_NOT_FOUND_MESSAGE = "Word not found"
WORD_EXISTS_MESSAGE = "Word already exists"
SEARCH_TERM_REQUIRED_MESSAGE = "Search term is required"
WORD_DELETED_MESSAGE = "Word deleted successfully"
FLAT_REQUIRED_FIELDS_MESSAGE = "Word and definition are required"
KIND_CHANGE_MESSAGE = "Entry kind cannot be changed"

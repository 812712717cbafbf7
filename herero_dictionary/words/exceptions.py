from fastapi import HTTPException, status

from herero_dictionary.words.constants import (
    REQUIRED_FIELDS_MESSAGE,
    SEARCH_TERM_REQUIRED_MESSAGE,
    WORD_EXISTS_MESSAGE,
    WORD_NOT_FOUND_MESSAGE,
)

class WordException(HTTPException):
    """Base exception for word entry errors"""
    pass

class WordNotFoundException(WordException):
    def __init__(self, detail: str = WORD_NOT_FOUND_MESSAGE):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail
        )

class WordAlreadyExistsException(WordException):
    def __init__(self, detail: str = WORD_EXISTS_MESSAGE):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )

class WordValidationException(WordException):
    def __init__(self, detail: str = REQUIRED_FIELDS_MESSAGE):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )

class SearchTermRequiredException(WordException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=SEARCH_TERM_REQUIRED_MESSAGE
        )

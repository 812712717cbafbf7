from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from herero_dictionary.database import get_db
from herero_dictionary.exceptions import AppException
from herero_dictionary.pagination import PaginatedResponse, PaginationParams
from herero_dictionary.words.constants import WORD_DELETED_MESSAGE
from herero_dictionary.words.dependencies import get_word_key, get_word_service, valid_entry_create
from herero_dictionary.words.exceptions import WordException
from herero_dictionary.words.schemas import (
    FlatEntryCreate,
    MessageResponse,
    RichEntryCreate,
    WordEntryResponse,
)
from herero_dictionary.words.service import WordService

router = APIRouter(prefix="/words", tags=["Words"])

# Errors that already carry their HTTP status
HANDLED_ERRORS = (WordException, AppException)


@router.get("", response_model=PaginatedResponse[WordEntryResponse])
async def get_words(
    page: Optional[str] = Query(None, description="Page number, defaults to 1"),
    limit: Optional[str] = Query(None, description="Page size, defaults to 10"),
    service: WordService = Depends(get_word_service),
    db: AsyncSession = Depends(get_db)
):
    """
    List entries ordered by word

    - **page**: page number; absent or non-numeric values fall back to 1
    - **limit**: page size; absent or non-numeric values fall back to 10
    """
    pagination = PaginationParams.from_query(page, limit)
    try:
        return await service.get_words(db, pagination)
    except HANDLED_ERRORS as e:
        raise e
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error listing words: {str(e)}"
        )


@router.get("/search", response_model=List[WordEntryResponse])
async def search_words(
    q: Optional[str] = Query(None, description="Substring to look for"),
    service: WordService = Depends(get_word_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Case-insensitive substring search over words, definitions and examples

    Returns at most 10 entries.
    """
    try:
        return await service.search_words(db, q)
    except HANDLED_ERRORS as e:
        raise e
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error searching words: {str(e)}"
        )


@router.get("/{word}", response_model=WordEntryResponse)
async def get_word(
    word: str = Depends(get_word_key),
    service: WordService = Depends(get_word_service),
    db: AsyncSession = Depends(get_db)
):
    """Get one entry by word"""
    try:
        return await service.get_word(db, word)
    except HANDLED_ERRORS as e:
        raise e
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error loading word: {str(e)}"
        )


@router.post("", response_model=WordEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_word(
    entry_data: Union[RichEntryCreate, FlatEntryCreate] = Depends(valid_entry_create),
    service: WordService = Depends(get_word_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Create an entry

    - rich entries: **word**, **pronunciation** and at least one item in **definitions**
    - flat entries: **word** and **definition**, optional **partOfSpeech**, **example**, **etymology**
    """
    try:
        return await service.create_word(db, entry_data)
    except HANDLED_ERRORS as e:
        raise e
    except Exception as e:
        raise HTTPException(
            status_code=400,
            detail=str(e)
        )


@router.put("/{word}", response_model=WordEntryResponse)
async def update_word(
    word: str = Depends(get_word_key),
    body: Dict[str, Any] = Body(..., description="Entry fields"),
    service: WordService = Depends(get_word_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Update an entry

    Rich entries are replaced and need the full field set; flat entries
    accept any subset of their fields.
    """
    try:
        return await service.update_word(db, word, body)
    except HANDLED_ERRORS as e:
        raise e
    except Exception as e:
        raise HTTPException(
            status_code=400,
            detail=str(e)
        )


@router.delete("/{word}", response_model=MessageResponse)
async def delete_word(
    word: str = Depends(get_word_key),
    service: WordService = Depends(get_word_service),
    db: AsyncSession = Depends(get_db)
):
    """Delete an entry"""
    try:
        await service.delete_word(db, word)
    except HANDLED_ERRORS as e:
        raise e
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error deleting word: {str(e)}"
        )
    return MessageResponse(message=WORD_DELETED_MESSAGE)

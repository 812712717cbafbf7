import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from herero_dictionary.config import settings
from herero_dictionary.exceptions import DatabaseException
from herero_dictionary.orm_mixins import utcnow
from herero_dictionary.pagination import PaginatedResponse, PaginationParams, get_offset, paginate
from herero_dictionary.words.constants import KIND_CHANGE_MESSAGE, EntryKind
from herero_dictionary.words.exceptions import (
    SearchTermRequiredException,
    WordAlreadyExistsException,
    WordNotFoundException,
    WordValidationException,
)
from herero_dictionary.words.models import Definition, WordEntry
from herero_dictionary.words.schemas import (
    DefinitionCreate,
    FlatEntryCreate,
    FlatEntryResponse,
    FlatEntryUpdate,
    RichEntryCreate,
    RichEntryResponse,
    WordEntryResponse,
)
from herero_dictionary.words.utils import entry_kind_of, entry_validation_message, normalize_word

logger = logging.getLogger(__name__)


class WordService:
    """Service for dictionary entry operations"""

    def __init__(self, search_limit: Optional[int] = None):
        self.search_limit = search_limit or settings.SEARCH_RESULT_LIMIT

    @staticmethod
    def to_response(entry: WordEntry) -> WordEntryResponse:
        """Convert an ORM entry to the response shape of its kind"""
        if entry.kind == EntryKind.RICH.value:
            return RichEntryResponse.model_validate(entry)
        return FlatEntryResponse.model_validate(entry)

    @staticmethod
    def _build_definitions(definitions: List[DefinitionCreate]) -> List[Definition]:
        return [
            Definition(
                position=position,
                type=item.type,
                definition=item.definition,
                example=item.example,
            )
            for position, item in enumerate(definitions)
        ]

    async def _find_entry(self, db: AsyncSession, word: str) -> Optional[WordEntry]:
        result = await db.execute(
            select(WordEntry).where(WordEntry.word == normalize_word(word))
        )
        return result.scalar_one_or_none()

    async def _commit(self, db: AsyncSession, word: str, action: str) -> None:
        """Commit the pending change, mapping unique-constraint failures to a duplicate word"""
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning(f"Unique constraint rejected {action} of word '{word}'")
            raise WordAlreadyExistsException()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Failed to {action} word '{word}': {e}", exc_info=True)
            raise DatabaseException(f"Error trying to {action} word: {str(e)}")

    async def count_entries(self, db: AsyncSession) -> int:
        """Total number of entries in the store"""
        try:
            result = await db.execute(select(func.count(WordEntry.id)))
            return result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error(f"Failed to count words: {e}", exc_info=True)
            raise DatabaseException(f"Error counting words: {str(e)}")

    async def get_words(self, db: AsyncSession, pagination: PaginationParams) -> PaginatedResponse[WordEntryResponse]:
        """Get one page of entries ordered by word"""
        total = await self.count_entries(db)
        try:
            result = await db.execute(
                select(WordEntry)
                .order_by(WordEntry.word.asc())
                .offset(get_offset(pagination.page, pagination.limit))
                .limit(pagination.limit)
            )
            entries = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list words: {e}", exc_info=True)
            raise DatabaseException(f"Error listing words: {str(e)}")

        return paginate(
            [self.to_response(entry) for entry in entries],
            total,
            pagination.page,
            pagination.limit,
        )

    async def search_words(self, db: AsyncSession, term: Optional[str]) -> List[WordEntryResponse]:
        """
        Case-insensitive substring search.

        Matches the word of every entry and, for rich entries, the text and
        example of any definition. The term is matched literally, surrounding
        whitespace included.
        """
        if not term:
            raise SearchTermRequiredException()

        definition_match = (
            select(Definition.id)
            .where(
                Definition.entry_id == WordEntry.id,
                or_(
                    Definition.definition.icontains(term, autoescape=True),
                    Definition.example.icontains(term, autoescape=True),
                ),
            )
            .exists()
        )
        try:
            result = await db.execute(
                select(WordEntry)
                .where(or_(WordEntry.word.icontains(term, autoescape=True), definition_match))
                .order_by(WordEntry.word.asc())
                .limit(self.search_limit)
            )
            entries = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to search words for '{term}': {e}", exc_info=True)
            raise DatabaseException(f"Error searching words: {str(e)}")

        return [self.to_response(entry) for entry in entries]

    async def get_word(self, db: AsyncSession, word: str) -> WordEntryResponse:
        """Get an entry by its normalized word"""
        try:
            entry = await self._find_entry(db, word)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load word '{word}': {e}", exc_info=True)
            raise DatabaseException(f"Error loading word: {str(e)}")
        if not entry:
            raise WordNotFoundException()
        return self.to_response(entry)

    async def create_word(
        self, db: AsyncSession, entry_data: Union[RichEntryCreate, FlatEntryCreate]
    ) -> WordEntryResponse:
        """
        Insert a new entry.

        The lookup before the insert only produces a friendlier error; two
        concurrent creates can both pass it, so the unique constraint on the
        word is what actually rejects the second one.
        """
        try:
            existing = await self._find_entry(db, entry_data.word)
        except SQLAlchemyError as e:
            logger.error(f"Failed to check word '{entry_data.word}': {e}", exc_info=True)
            raise DatabaseException(f"Error creating word: {str(e)}")
        if existing:
            raise WordAlreadyExistsException()

        now = utcnow()
        entry = WordEntry(
            word=entry_data.word,
            kind=entry_data.kind,
            date_added=now,
            last_modified=now,
        )
        if isinstance(entry_data, RichEntryCreate):
            entry.pronunciation = entry_data.pronunciation
            entry.definitions = self._build_definitions(entry_data.definitions)
        else:
            entry.definition = entry_data.definition
            entry.part_of_speech = entry_data.part_of_speech.value if entry_data.part_of_speech else None
            entry.example = entry_data.example
            entry.etymology = entry_data.etymology
            entry.definitions = []

        db.add(entry)
        await self._commit(db, entry.word, "create")
        logger.info(f"Created {entry.kind} word '{entry.word}'")
        return self.to_response(entry)

    async def update_word(self, db: AsyncSession, word: str, body: Dict[str, Any]) -> WordEntryResponse:
        """
        Update an entry in place.

        Rich entries are replaced as a whole and need word, pronunciation and
        at least one definition. Flat entries apply only the fields present
        in the body. The entry kind cannot change.
        """
        try:
            entry = await self._find_entry(db, word)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load word '{word}': {e}", exc_info=True)
            raise DatabaseException(f"Error updating word: {str(e)}")
        if not entry:
            raise WordNotFoundException()

        # A flat entry cannot take rich fields
        if entry.kind == EntryKind.FLAT.value and entry_kind_of(body) == EntryKind.RICH.value:
            raise WordValidationException(KIND_CHANGE_MESSAGE)

        try:
            if entry.kind == EntryKind.RICH.value:
                changes = RichEntryCreate.model_validate(body)
            else:
                changes = FlatEntryUpdate.model_validate(body)
        except ValidationError as e:
            raise WordValidationException(entry_validation_message(e, entry.kind))

        new_word = changes.word
        if new_word and new_word != entry.word:
            try:
                taken = await self._find_entry(db, new_word)
            except SQLAlchemyError as e:
                logger.error(f"Failed to check word '{new_word}': {e}", exc_info=True)
                raise DatabaseException(f"Error updating word: {str(e)}")
            if taken:
                raise WordAlreadyExistsException()

        if isinstance(changes, RichEntryCreate):
            entry.word = changes.word
            entry.pronunciation = changes.pronunciation
            entry.definitions = self._build_definitions(changes.definitions)
        else:
            # mode="json" stores enum members by value
            for field, value in changes.model_dump(exclude_unset=True, exclude={"kind"}, mode="json").items():
                setattr(entry, field, value)
        entry.last_modified = utcnow()

        await self._commit(db, entry.word, "update")
        logger.info(f"Updated word '{word}'" + (f" (now '{entry.word}')" if entry.word != word else ""))
        return self.to_response(entry)

    async def delete_word(self, db: AsyncSession, word: str) -> None:
        """Delete an entry and its definitions"""
        try:
            entry = await self._find_entry(db, word)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load word '{word}': {e}", exc_info=True)
            raise DatabaseException(f"Error deleting word: {str(e)}")
        if not entry:
            raise WordNotFoundException()

        await db.delete(entry)
        await self._commit(db, word, "delete")
        logger.info(f"Deleted word '{word}'")

import unittest
from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from herero_dictionary.exceptions import DatabaseException
from herero_dictionary.pagination import PaginationParams
from herero_dictionary.words.constants import KIND_CHANGE_MESSAGE, REQUIRED_FIELDS_MESSAGE
from herero_dictionary.words.exceptions import (
    SearchTermRequiredException,
    WordAlreadyExistsException,
    WordNotFoundException,
    WordValidationException,
)
from herero_dictionary.words.schemas import FlatEntryCreate, RichEntryCreate
from herero_dictionary.words.service import WordService
from tests.base import DatabaseTestCase


def rich(word, definition="to need", example=None):
    return RichEntryCreate(
        word=word,
        pronunciation="p",
        definitions=[{"type": "verb", "definition": definition, "example": example}],
    )


class WordServiceTests(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.service = WordService()

    async def test_create_sets_equal_timestamps(self):
        created = await self.service.create_word(self.db, rich("Okuhepa"))
        self.assertEqual(created.word, "okuhepa")
        self.assertEqual(created.date_added, created.last_modified)

    async def test_create_rejects_normalized_duplicate(self):
        await self.service.create_word(self.db, rich("okuhepa"))
        with self.assertRaises(WordAlreadyExistsException):
            await self.service.create_word(self.db, rich("  OKUHEPA "))
        self.assertEqual(await self.service.count_entries(self.db), 1)

    async def test_unique_constraint_backs_up_precheck(self):
        await self.service.create_word(self.db, rich("okuhepa"))
        # Simulate a concurrent create that passed the lookup
        self.service._find_entry = AsyncMock(return_value=None)
        with self.assertRaises(WordAlreadyExistsException):
            await self.service.create_word(self.db, rich("okuhepa"))

    async def test_duplicate_across_kinds(self):
        await self.service.create_word(self.db, rich("ombwa"))
        with self.assertRaises(WordAlreadyExistsException):
            await self.service.create_word(self.db, FlatEntryCreate(word="Ombwa", definition="dog"))

    async def test_get_missing_word(self):
        with self.assertRaises(WordNotFoundException):
            await self.service.get_word(self.db, "nothing")

    async def test_list_is_sorted_and_paged(self):
        for word in ["ozu", "ake", "ombwa", "eho", "okuhepa"]:
            await self.service.create_word(self.db, rich(word))

        first = await self.service.get_words(self.db, PaginationParams(page=1, limit=2))
        self.assertEqual([e.word for e in first.entries], ["ake", "eho"])
        self.assertEqual(first.total_entries, 5)
        self.assertEqual(first.total_pages, 3)

        last = await self.service.get_words(self.db, PaginationParams(page=3, limit=2))
        self.assertEqual([e.word for e in last.entries], ["ozu"])

        beyond = await self.service.get_words(self.db, PaginationParams(page=9, limit=2))
        self.assertEqual(beyond.entries, [])
        self.assertEqual(beyond.current_page, 9)

    async def test_search_matches_word_definition_and_example(self):
        await self.service.create_word(self.db, rich("okuhepa", definition="to need"))
        await self.service.create_word(self.db, rich("okurya", definition="to eat", example="Ovanatje ve NEED food"))
        await self.service.create_word(self.db, rich("ombwa", definition="dog"))
        await self.service.create_word(self.db, FlatEntryCreate(word="eneed", definition="unrelated"))

        results = await self.service.search_words(self.db, "Need")
        self.assertEqual([e.word for e in results], ["eneed", "okuhepa", "okurya"])

    async def test_search_does_not_match_flat_definition(self):
        await self.service.create_word(self.db, FlatEntryCreate(word="ombwa", definition="dog"))
        self.assertEqual(await self.service.search_words(self.db, "dog"), [])

    async def test_search_treats_wildcards_literally(self):
        await self.service.create_word(self.db, rich("okuhepa"))
        self.assertEqual(await self.service.search_words(self.db, "%"), [])
        self.assertEqual(await self.service.search_words(self.db, "_"), [])

    async def test_search_is_capped(self):
        for i in range(12):
            await self.service.create_word(self.db, rich(f"oka{i:02d}"))
        results = await self.service.search_words(self.db, "oka")
        self.assertEqual(len(results), 10)

    async def test_search_requires_term(self):
        for term in (None, ""):
            with self.assertRaises(SearchTermRequiredException):
                await self.service.search_words(self.db, term)

    async def test_search_keeps_surrounding_spaces(self):
        await self.service.create_word(self.db, rich("okuhepa", definition="to need"))
        await self.service.create_word(self.db, rich("ombwa", definition="dog"))
        self.assertEqual([e.word for e in await self.service.search_words(self.db, " need")], ["okuhepa"])
        self.assertEqual(await self.service.search_words(self.db, "need "), [])
        self.assertEqual(await self.service.search_words(self.db, "   "), [])

    async def test_rich_update_replaces_definitions(self):
        created = await self.service.create_word(self.db, rich("okuhepa"))
        updated = await self.service.update_word(self.db, "okuhepa", {
            "word": "Okuhepa",
            "pronunciation": "oh-koo-HEH-pah",
            "definitions": [
                {"type": "verb", "definition": "to want"},
                {"type": "verb", "definition": "to lack", "example": "Ndi hepa omeva"},
            ],
        })
        self.assertEqual(updated.pronunciation, "oh-koo-HEH-pah")
        self.assertEqual([d.definition for d in updated.definitions], ["to want", "to lack"])
        self.assertEqual(updated.date_added, created.date_added)
        self.assertGreater(updated.last_modified, updated.date_added)

        fetched = await self.service.get_word(self.db, "okuhepa")
        self.assertEqual(len(fetched.definitions), 2)

    async def test_rich_update_missing_fields_leaves_record(self):
        await self.service.create_word(self.db, rich("okuhepa"))
        with self.assertRaises(WordValidationException) as ctx:
            await self.service.update_word(self.db, "okuhepa", {"word": "okuhepa", "pronunciation": "x"})
        self.assertEqual(ctx.exception.detail, REQUIRED_FIELDS_MESSAGE)

        fetched = await self.service.get_word(self.db, "okuhepa")
        self.assertEqual(fetched.pronunciation, "p")

    async def test_flat_update_is_partial(self):
        await self.service.create_word(self.db, FlatEntryCreate(word="ombwa", definition="dog", etymology="Bantu"))
        updated = await self.service.update_word(self.db, "ombwa", {"partOfSpeech": "noun"})
        self.assertEqual(updated.part_of_speech.value, "noun")
        self.assertEqual(updated.definition, "dog")
        self.assertEqual(updated.etymology, "Bantu")

    async def test_flat_update_rejects_rich_body(self):
        await self.service.create_word(self.db, FlatEntryCreate(word="ombwa", definition="dog"))
        with self.assertRaises(WordValidationException):
            await self.service.update_word(self.db, "ombwa", {"kind": "rich"})

    async def test_flat_update_rejects_rich_fields(self):
        created = await self.service.create_word(self.db, FlatEntryCreate(word="ombwa", definition="dog"))
        with self.assertRaises(WordValidationException) as ctx:
            await self.service.update_word(self.db, "ombwa", {
                "word": "ombwa",
                "pronunciation": "om-bwa",
                "definitions": [{"type": "noun", "definition": "cat"}],
            })
        self.assertEqual(ctx.exception.detail, KIND_CHANGE_MESSAGE)

        fetched = await self.service.get_word(self.db, "ombwa")
        self.assertEqual(fetched.definition, "dog")
        self.assertEqual(fetched.last_modified, created.last_modified)

    async def test_rename_onto_existing_word(self):
        await self.service.create_word(self.db, rich("okuhepa"))
        await self.service.create_word(self.db, FlatEntryCreate(word="ombwa", definition="dog"))
        with self.assertRaises(WordAlreadyExistsException):
            await self.service.update_word(self.db, "ombwa", {"word": "OKUHEPA"})

    async def test_update_missing_word(self):
        with self.assertRaises(WordNotFoundException):
            await self.service.update_word(self.db, "nothing", {"definition": "x"})

    async def test_delete(self):
        await self.service.create_word(self.db, rich("okuhepa"))
        await self.service.delete_word(self.db, "okuhepa")
        self.assertEqual(await self.service.count_entries(self.db), 0)
        with self.assertRaises(WordNotFoundException):
            await self.service.delete_word(self.db, "okuhepa")

    async def test_store_failure_becomes_database_exception(self):
        broken_db = AsyncMock()
        broken_db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with self.assertRaises(DatabaseException):
            await self.service.get_words(broken_db, PaginationParams())


if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python3
"""
Script to import dictionary entries from a JSON file

The file holds a list of entry objects, each either rich
({"word", "pronunciation", "definitions": [...]}) or flat
({"word", "definition", "partOfSpeech", "example", "etymology"}).
"""
import asyncio
import json
import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

import herero_dictionary.models  # noqa: F401
from herero_dictionary.database import AsyncSessionLocal, create_tables
from herero_dictionary.words.exceptions import WordAlreadyExistsException
from herero_dictionary.words.schemas import word_entry_create_adapter
from herero_dictionary.words.service import WordService
from herero_dictionary.words.utils import describe_validation_error


async def import_words(json_file_path: str) -> dict:
    """Import entries from a JSON file, skipping words that already exist"""
    with open(json_file_path, 'r', encoding='utf-8') as file:
        rows = json.load(file)

    if not isinstance(rows, list):
        raise ValueError("Expected a JSON list of entries")

    await create_tables()
    service = WordService()
    counts = {"imported": 0, "skipped": 0, "invalid": 0}

    print(f"📥 Importing {len(rows):,} entries from {json_file_path}...")
    async with AsyncSessionLocal() as db:
        for row_num, row in enumerate(rows, 1):
            try:
                entry_data = word_entry_create_adapter.validate_python(row)
            except ValidationError as e:
                counts["invalid"] += 1
                print(f"⚠️  Entry #{row_num} is invalid: {describe_validation_error(e)}")
                continue

            try:
                await service.create_word(db, entry_data)
                counts["imported"] += 1
            except WordAlreadyExistsException:
                counts["skipped"] += 1

            if row_num % 500 == 0:
                print(f"📥 Processed {row_num:,} entries...")

        total = await service.count_entries(db)

    print(
        f"✅ Import completed! Imported {counts['imported']:,}, "
        f"skipped {counts['skipped']:,} existing, {counts['invalid']:,} invalid. "
        f"Total entries: {total:,}"
    )
    return counts


def main():
    """Main function"""
    if len(sys.argv) != 2:
        print("Usage: python scripts/import_words.py <json_file_path>")
        print("Example: python scripts/import_words.py data/words.json")
        sys.exit(1)

    try:
        asyncio.run(import_words(sys.argv[1]))
    except Exception as e:
        print(f"❌ Error importing words: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from herero_dictionary.database import Base
from herero_dictionary.orm_mixins import TimestampMixin
from herero_dictionary.words.constants import EntryKind


class WordEntry(Base, TimestampMixin):
    """Dictionary entry keyed by its normalized word"""
    __tablename__ = "word_entries"

    id = Column(Integer, primary_key=True, index=True)
    word = Column(String(255), nullable=False, unique=True, index=True)
    kind = Column(String(16), nullable=False, default=EntryKind.RICH.value)

    # Rich entries
    pronunciation = Column(String(255), nullable=True)

    # Flat entries
    definition = Column(Text, nullable=True)
    part_of_speech = Column(String(32), nullable=True)
    example = Column(Text, nullable=True)
    etymology = Column(Text, nullable=True)

    # Relationships
    definitions = relationship(
        "Definition",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="Definition.position",
        lazy="selectin",
    )


class Definition(Base):
    """Ordered definition belonging to a rich entry"""
    __tablename__ = "word_definitions"

    id = Column(Integer, primary_key=True, index=True)
    entry_id = Column(Integer, ForeignKey("word_entries.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    type = Column(String(64), nullable=False)
    definition = Column(Text, nullable=False)
    example = Column(Text, nullable=True)

    entry = relationship("WordEntry", back_populates="definitions")

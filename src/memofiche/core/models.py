"""Canonical data models for memo-card documents, sections, and content blocks"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentKind(str, Enum):
    """Restrict content blocks to the media kinds the editor can render"""
    text = "text"
    image = "image"
    video = "video"


class SectionKind(str, Enum):
    """Which bucket of a Document a section lives in"""
    schema = "schema"
    memo = "memo"
    custom = "custom"


class ContentBlock(BaseModel):
    """The atomic unit of rich content: free text, or an image/video URL."""
    model_config = ConfigDict(frozen=True)

    type: ContentKind = ContentKind.text
    value: str = ""

    def is_blank(self) -> bool:
        return not self.value.strip()


class Section(BaseModel):
    """A titled, identified container of ordered content blocks."""
    id: str
    title: str = ""
    blocks: list[ContentBlock] = Field(default_factory=list)


class Document(BaseModel):
    """Canonical in-memory form of a stored memo-card document.

    section_order holds ids only; section values live in the three buckets.
    hidden_sections are tombstones for schema sections the user removed from
    display, so reconciliation does not bring them back.
    extra carries every non-section key of the stored document unchanged.
    """
    variant:         str
    schema_fields:   dict[str, Section] = Field(default_factory=dict)
    memo_sections:   list[Section] = Field(default_factory=list)
    custom_sections: list[Section] = Field(default_factory=list)
    section_order:   list[str] = Field(default_factory=list)
    hidden_sections: list[str] = Field(default_factory=list)
    extra:           dict[str, Any] = Field(default_factory=dict)

    def sections(self) -> dict[str, Section]:
        """Return id -> Section across schema, memo, and custom buckets (first id wins)."""
        found: dict[str, Section] = {}
        for s in [*self.schema_fields.values(), *self.memo_sections, *self.custom_sections]:
            found.setdefault(s.id, s)
        return found

    def section(self, section_id: str) -> Section:
        """Return the section for an id, or an empty placeholder for a dangling order entry."""
        return self.sections().get(section_id) or Section(id=section_id)

    def kind_of(self, section_id: str) -> Optional[SectionKind]:
        if section_id in self.schema_fields:
            return SectionKind.schema
        if any(s.id == section_id for s in self.memo_sections):
            return SectionKind.memo
        if any(s.id == section_id for s in self.custom_sections):
            return SectionKind.custom
        return None

    def user_section_ids(self) -> list[str]:
        """Ids of custom sections followed by memo sections, in stored order."""
        return [s.id for s in self.custom_sections] + [s.id for s in self.memo_sections]

# model/extraction.py
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class AlignmentStatus(str, Enum):
    match_exact = "match_exact"
    match_greater = "match_greater"
    match_lesser = "match_lesser"
    match_fuzzy = "match_fuzzy"


class FormatType(str, Enum):
    yaml = "yaml"
    json = "json"


class CharInterval(BaseModel):
    """
    Half-open [start_pos, end_pos) offset range into the owning document text.
    Either bound may be None, meaning the position is unresolved.
    """

    start_pos: int | None = None
    end_pos: int | None = None


class TokenInterval(BaseModel):
    start_index: int
    end_index: int


class Extraction(BaseModel):
    extraction_class: str
    extraction_text: str
    char_interval: CharInterval | None = None
    alignment_status: AlignmentStatus | None = None
    extraction_index: int | None = None
    group_index: int | None = None
    description: str | None = None
    attributes: dict[str, str | list[str]] | None = None
    token_interval: TokenInterval | None = None


class AnnotatedDocument(BaseModel):
    # text is the fixed source every offset is interpreted against
    model_config = ConfigDict(frozen=True)

    document_id: str
    text: str
    extractions: list[Extraction] = Field(default_factory=list)


class ExampleData(BaseModel):
    text: str = ""
    extractions: list[Extraction] = Field(default_factory=list)

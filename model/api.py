# model/api.py
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field
from model.extraction import AnnotatedDocument, ExampleData, FormatType
from model.visualization import VisualizationConfig
from util.enums import ModelProvider
from util.types import FrameType


class ExtractionRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    # Lenient defaults: validate_extraction_request reports every problem at once
    text: str = ""
    prompt_description: str = ""
    examples: list[ExampleData] = Field(default_factory=list)
    model_id: str | None = None
    api_key: str | None = None
    format_type: FormatType = FormatType.json
    max_char_buffer: int | None = None
    temperature: float | None = None
    extraction_passes: int = Field(default=1, ge=1)
    max_workers: int | None = None
    additional_context: str | None = None


class ExtractionResponse(BaseModel):
    success: bool
    data: AnnotatedDocument | None = None
    error: str | None = None


class VisualizeRequest(BaseModel):
    document: AnnotatedDocument
    currentIndex: int = 0
    options: VisualizationConfig | None = None


class AvailableProviders(BaseModel):
    gemini: bool
    openai: bool


class EnvironmentInfo(BaseModel):
    environment: str
    defaultProvider: ModelProvider
    availableProviders: AvailableProviders
    recommendedProvider: ModelProvider | None = None
    appUrl: str
    maxConcurrentRequests: int
    requestTimeout: int


class ExtractStatusResponse(BaseModel):
    status: Literal["ok"] = "ok"
    message: str
    timestamp: str
    environment: EnvironmentInfo


class PlaybackFrame(BaseModel):
    type: FrameType
    payload: dict


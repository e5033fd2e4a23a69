# model/visualization.py
from pydantic import BaseModel, ConfigDict, Field
from model.extraction import Extraction
from util.enums import PlaybackStatus


class VisualizationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    animation_speed: float = Field(default=1.5, gt=0)  # seconds per step
    show_legend: bool = True
    gif_optimized: bool = False
    context_chars: int = Field(default=150, ge=0)

    @classmethod
    def from_settings(cls, settings) -> "VisualizationConfig":
        return cls(
            animation_speed=settings.ANIMATION_INTERVAL_SECONDS,
            context_chars=settings.CONTEXT_CHARS,
        )


class PlaybackState(BaseModel):
    status: PlaybackStatus
    currentIndex: int
    isPlaying: bool
    total: int


class LegendEntry(BaseModel):
    extraction_class: str
    color: str


class ClassCountModel(BaseModel):
    extraction_class: str
    count: int


class StatsModel(BaseModel):
    total: int
    uniqueClasses: int
    distribution: list[ClassCountModel]
    densityPerMille: int


class ContextModel(BaseModel):
    before: str
    after: str


class VisualizationResponse(BaseModel):
    document_id: str
    markup: str
    colorMap: dict[str, str]
    legend: list[LegendEntry]
    stats: StatsModel
    playback: PlaybackState
    extractions: list[Extraction]
    current: Extraction | None = None
    context: ContextModel | None = None
    readout: str | None = None

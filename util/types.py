# util/types.py
from typing import Literal, TypedDict


# Flow: Narrow types for playback WebSocket frames.
FrameType = Literal["state", "error"]

PlaybackAction = Literal["play", "pause", "toggle", "next", "prev", "jump"]


class PlaybackCommand(TypedDict, total=False):
    action: PlaybackAction
    index: int

"""Protocols and small concrete pieces for embedding in a host editor."""

from .capture import (
    CaptureFactory,
    CaptureHandle,
    KeyFilter,
    KeyFilterCapture,
    KeyFilterHost,
    install_key_filter,
)
from .commands import CommandExecutor, CommandSurface, StaticCommandSurface
from .events import EventChannel, Subscription
from .view import (
    EditorView,
    FixedViewResolver,
    Position,
    TextStructureSelector,
    ViewResolver,
    no_text_structure,
)

__all__ = [
    "CaptureFactory",
    "CaptureHandle",
    "CommandExecutor",
    "CommandSurface",
    "EditorView",
    "EventChannel",
    "FixedViewResolver",
    "KeyFilter",
    "KeyFilterCapture",
    "KeyFilterHost",
    "Position",
    "StaticCommandSurface",
    "Subscription",
    "TextStructureSelector",
    "ViewResolver",
    "install_key_filter",
    "no_text_structure",
]

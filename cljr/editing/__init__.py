"""Buffers, snippets and the workspace the refactor commands edit."""

from .buffer import Buffer, Marker, TextBuffer
from .snippets import SnippetSession, expand_snippet
from .workspace import Workspace

__all__ = [
    "Buffer",
    "Marker",
    "SnippetSession",
    "TextBuffer",
    "Workspace",
    "expand_snippet",
]

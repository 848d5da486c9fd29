"""Backends that turn the code model into source text."""

from .python_source import Formatter, SourceEmitter, render_imports, render_module

__all__ = ["Formatter", "SourceEmitter", "render_imports", "render_module"]

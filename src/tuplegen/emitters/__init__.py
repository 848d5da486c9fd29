"""Emitters turning the FamilyModel into code model objects."""

from .implementations import emit_implementation, emit_implementations
from .interfaces import emit_interface, emit_interfaces
from .interop import add_interface_interop, emit_native_converters

__all__ = [
    "add_interface_interop",
    "emit_implementation",
    "emit_implementations",
    "emit_interface",
    "emit_interfaces",
    "emit_native_converters",
]

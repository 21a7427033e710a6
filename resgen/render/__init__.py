"""Rendering of validated symbol trees and write-if-changed output."""

from .output import OutputWriteError, WriteResult, write_if_changed
from .swift import SwiftRenderer
from .swift_text import swift_string, swift_type

__all__ = ["OutputWriteError", "SwiftRenderer", "WriteResult", "swift_string", "swift_type", "write_if_changed"]

"""
Text protocol between the engine and external player programs.
"""

from .codec import Frame, encode_frame, encode_reply, parse_frame, parse_reply
from .external_player import ExternalProcessPlayer

__all__ = [
    "Frame",
    "encode_frame",
    "parse_frame",
    "encode_reply",
    "parse_reply",
    "ExternalProcessPlayer",
]

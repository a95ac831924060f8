"""Utility exports."""
from .segments import decode_segment, encode_segment

__all__ = ["decode_segment", "encode_segment"]

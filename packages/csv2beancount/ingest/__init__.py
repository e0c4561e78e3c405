"""Input readers for delimited transaction exports."""

from .reader import open_rows, read_rows

__all__ = ["open_rows", "read_rows"]

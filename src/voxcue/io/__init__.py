"""I/O utilities."""

from voxcue.io.export import to_json, write_json

__all__ = ["to_json", "write_json"]

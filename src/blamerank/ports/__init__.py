from .blame_source import BlameSourcePort

__all__ = ["BlameSourcePort"]

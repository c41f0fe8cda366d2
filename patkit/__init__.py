"""Pattern compilation and matching, glob conversion, an ordered key:value store and allocation tracking."""

__version__ = "0.1.0"
__all__ = ["errors", "pattern", "patterntext", "matcher", "kvstore", "alloctrace"]
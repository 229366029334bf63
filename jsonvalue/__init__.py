"""In-memory JSON values with UTF-8 checking, copying, equality and pack/unpack."""

__version__ = "2.14.1"

__all__ = [
    "errors",
    "utf",
    "strconv",
    "values",
    "objects",
    "scanner",
    "pack",
    "unpack",
]
"""Operation API for the XML editor."""

from .editor import UnknownOperationError, XMLEditor

__all__ = [
    "UnknownOperationError",
    "XMLEditor",
]

"""Exceptions raised by the documentation pipeline."""


class DocumentationError(Exception):
    """Base class for documentation pipeline errors."""


class SymbolEvaluationError(DocumentationError):
    """A symbol could not be evaluated (malformed metadata, unresolvable base type)."""

    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(f"{symbol}: {reason}")
        self.symbol = symbol
        self.reason = reason


class SymbolSourceError(DocumentationError):
    """A symbol source could not be opened."""

"""Non-fatal problems recorded while building a documentation model."""

from dataclasses import dataclass

INTERNALS_NOT_VISIBLE = "DND001"
SYMBOL_SKIPPED = "DND002"
EXTENSION_NOT_RELOCATED = "DND003"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem tied to a symbol."""

    code: str
    message: str
    symbol: str = ""
    is_warning: bool = True

    def __str__(self) -> str:
        level = "warning" if self.is_warning else "info"
        where = f" [{self.symbol}]" if self.symbol else ""
        return f"{level} {self.code}{where}: {self.message}"

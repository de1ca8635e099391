"""Exception hierarchy for declgen.

All exceptions inherit from DeclgenError, so callers driving several
generation passes can catch one base class per pass.
"""


class DeclgenError(Exception):
    """Base exception for all declgen errors."""


class DeclarationError(DeclgenError):
    """Raised when an operation would break the declaration tree invariants."""


class GenerationError(DeclgenError):
    """Raised when a generation pass cannot continue."""


class MissingAnchorError(GenerationError):
    """Raised when a declaration the pass depends on was never generated."""

    def __init__(self, anchor: str) -> None:
        super().__init__(f"{anchor} not declared!")
        self.anchor = anchor


class DocTreeError(DeclgenError):
    """Raised when a documentation tree cannot be read or validated."""

"""Diagnostic kinds and values"""

__all__ = ["ErrorKind", "Diagnostic"]

import enum
from dataclasses import dataclass

from ._position import SourcePosition


class ErrorKind(enum.Enum):
    """Conflicts detected while reading docblock directives."""

    MULTIPLE_FLOW_ATTRIBUTES = "MultipleFlowAttributes"
    MULTIPLE_PROVIDES_MODULE_ATTRIBUTES = "MultipleProvidesModuleAttributes"


_MESSAGES = {
    ErrorKind.MULTIPLE_FLOW_ATTRIBUTES:
        "Unexpected @flow declaration. Only one per file is allowed.",
    ErrorKind.MULTIPLE_PROVIDES_MODULE_ATTRIBUTES:
        "Unexpected @providesModule declaration. Only one per file is allowed.",
}


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found in a docblock.

    Attributes:
        position: Position of the comment holding the repeated directive
        kind: Which directive was repeated
    """
    position: SourcePosition
    kind: ErrorKind

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind]

    def __str__(self) -> str:
        return f"{self.position.location()}: {self.message}"

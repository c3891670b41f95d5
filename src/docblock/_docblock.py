"""Docblock metadata and directive parsing.

The docblock is the leading comment of a file. Its directives opt a file in
or out of type checking, keep identifiers from being munged and give the
file a legacy module name:

    /**
     * @flow weak
     * @providesModule Widget
     * @preventMunge
     */

`@flow`, `@noflow` and `@providesModule` may each appear once. Later copies
are reported as diagnostics and the first one is kept. `@preventMunge` can
repeat freely since it can only ever turn the flag on.
"""

__all__ = [
    "FlowMode", "Docblock", "Directive", "DEFAULT_DOCBLOCK", "DECLARATION_EXT",
    "split_words", "parse_directives", "merge", "parse_comments",
    "extract", "extract_file", "json_of_docblock",
]

import dataclasses
import enum
import pathlib
import re

from . import _lexer, _scan
from ._error import Diagnostic, ErrorKind

# Suffix of files that only declare types
DECLARATION_EXT = ".flow"

_WORD_SEPARATORS = re.compile(r"[ \t\n\r\f\v*/]+")


class FlowMode(enum.Enum):
    """Type checking mode requested by a file."""

    OPT_IN = "OptIn"
    OPT_IN_WEAK = "OptInWeak"
    OPT_OUT = "OptOut"


@dataclasses.dataclass(frozen=True)
class Docblock:
    """Metadata extracted from the docblock of one file.

    Attributes:
        flow: Requested type checking mode, if any
        prevent_munge: True when @preventMunge was seen, otherwise None
        provides_module: Name given by @providesModule, if any
        is_declaration_file: Whether the filename marks a declaration file
    """
    flow: FlowMode | None = None
    prevent_munge: bool | None = None
    provides_module: str | None = None
    is_declaration_file: bool = False

    @property
    def is_flow(self) -> bool:
        """True when the file opted in to type checking, weakly or not."""
        return self.flow in (FlowMode.OPT_IN, FlowMode.OPT_IN_WEAK)

    def to_json(self) -> dict:
        return json_of_docblock(self)


DEFAULT_DOCBLOCK = Docblock()


@dataclasses.dataclass(frozen=True)
class Directive:
    """A recognized directive.

    Attributes:
        name: One of "flow", "providesModule" or "preventMunge"
        value: FlowMode for flow, the module name for providesModule,
            True for preventMunge
    """
    name: str
    value: object


def split_words(text):
    """Split comment text on whitespace, ``*`` and ``/``."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def parse_directives(words):
    """Scan words for directives.

    Args:
        words: (list[str]) Words of one comment

    Yields:
        (Directive) Each directive found, in order
    """
    index = 0
    count = len(words)
    while index < count:
        word = words[index]
        following = words[index + 1] if index + 1 < count else None
        if word == "@flow" and following == "weak":
            yield Directive("flow", FlowMode.OPT_IN_WEAK)
            index += 2
        elif word == "@flow":
            yield Directive("flow", FlowMode.OPT_IN)
            index += 1
        elif word == "@noflow":
            yield Directive("flow", FlowMode.OPT_OUT)
            index += 1
        elif word == "@providesModule" and following is not None:
            yield Directive("providesModule", following)
            index += 2
        elif word == "@preventMunge":
            yield Directive("preventMunge", True)
            index += 1
        else:
            index += 1


def merge(accumulator, position, directive):
    """Apply one directive to the accumulated result.

    The first flow mode and the first module name win. Any later one leaves
    the docblock alone and adds a diagnostic at ``position``.

    Args:
        accumulator: (tuple[tuple[Diagnostic, ...], Docblock]) Result so far
        position: (SourcePosition) Position of the comment holding the directive
        directive: (Directive) Directive to apply

    Returns:
        (tuple[tuple[Diagnostic, ...], Docblock]) New result
    """
    errors, info = accumulator
    if directive.name == "flow":
        if info.flow is not None:
            return errors + (Diagnostic(position, ErrorKind.MULTIPLE_FLOW_ATTRIBUTES),), info
        return errors, dataclasses.replace(info, flow=directive.value)
    if directive.name == "providesModule":
        if info.provides_module is not None:
            diagnostic = Diagnostic(position, ErrorKind.MULTIPLE_PROVIDES_MODULE_ATTRIBUTES)
            return errors + (diagnostic,), info
        return errors, dataclasses.replace(info, provides_module=directive.value)
    if directive.name == "preventMunge":
        return errors, dataclasses.replace(info, prevent_munge=True)
    raise ValueError(f"Unknown directive {directive.name!r}")


def parse_comments(comments, base=DEFAULT_DOCBLOCK):
    """Fold the directives of every comment into a docblock.

    Args:
        comments: (Iterable[Comment]) Comments in source order
        base: (Docblock) Starting metadata

    Returns:
        (tuple[list[Diagnostic], Docblock]) Diagnostics in the order they
        were found, and the resulting docblock
    """
    accumulator = ((), base)
    for comment in comments:
        for directive in parse_directives(split_words(comment.text)):
            accumulator = merge(accumulator, comment.position, directive)
    errors, info = accumulator
    return list(errors), info


def extract(content, filename=None, max_tokens=_scan.MAX_TOKENS,
            declaration_ext=DECLARATION_EXT):
    """Extract docblock metadata from source text.

    Only the first few tokens are lexed. String literals and semicolons may
    come before the docblock, anything else means the file has none.

    Args:
        content: (str | bytes) Source text; bytes are decoded as UTF-8
        filename: (str | None) Used for the declaration file check and
            diagnostic positions
        max_tokens: (int) Most tokens to examine while looking for comments
        declaration_ext: (str) Filename suffix of declaration files

    Returns:
        (tuple[list[Diagnostic], Docblock]) Diagnostics and metadata
    """
    name = str(filename) if filename is not None else None
    info = DEFAULT_DOCBLOCK
    if name is not None and name.endswith(declaration_ext):
        info = dataclasses.replace(info, is_declaration_file=True)

    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    comments = _scan.first_comments(_lexer.lex(content, name), max_tokens)
    if comments is None:
        return [], info
    return parse_comments(comments, info)


def extract_file(path, max_tokens=_scan.MAX_TOKENS, declaration_ext=DECLARATION_EXT):
    """Extract docblock metadata from a file.

    Args:
        path: (str | pathlib.Path) File to read as UTF-8

    Returns:
        (tuple[list[Diagnostic], Docblock]) Diagnostics and metadata
    """
    path = pathlib.Path(path)
    content = path.read_text(encoding="utf-8")
    return extract(content, str(path), max_tokens, declaration_ext)


def json_of_docblock(info):
    """Plain structure for debugging output."""
    return {
        "flow": info.flow.value if info.flow is not None else None,
        "preventMunge": info.prevent_munge,
        "providesModule": info.provides_module,
        "isDeclarationFile": info.is_declaration_file,
    }

"""Token stream with attached comments.

The lexical grammar lives in ``lark/tokens.lark``. Lark reports comments and
whitespace as ignored terminals; this module drops the whitespace and hands
each comment to the next significant token, so callers see one result per
token along with every comment that preceded it.
"""

__all__ = ["Comment", "LexResult", "lex", "STRING", "SEMICOLON", "EOF", "ERROR"]

import lark

from ._position import SourcePosition

STRING = "STRING"
SEMICOLON = "SEMICOLON"
EOF = "EOF"
ERROR = "ERROR"

_COMMENT_KINDS = {
    "BLOCK_COMMENT": "block",
    "UNTERMINATED_COMMENT": "block",
    "LINE_COMMENT": "line",
}
_SKIPPED = frozenset(["WS"])

_parsers = {}


class Comment:
    """A block or line comment.

    Attributes:
        position: (SourcePosition) Where the comment sits, delimiters included
        kind: (str) "block" or "line"
        text: (str) Comment body without the ``/* */`` or ``//`` delimiters
    """
    __slots__ = ("position", "kind", "text")
    def __init__(self, position, kind, text):
        self.position = position
        self.kind = kind
        self.text = text
    def __repr__(self):
        return f"Comment({self.kind}, {self.text!r}, {self.position.location()})"


class LexResult:
    """A significant token along with the comments that came before it.

    Attributes:
        kind: (str) Terminal name from the grammar, or EOF / ERROR
        value: (str) Matched source text
        position: (SourcePosition) Token position
        comments: (list[Comment]) Comments since the previous token, in order
    """
    __slots__ = ("kind", "value", "position", "comments")
    def __init__(self, kind, value, position, comments=()):
        self.kind = kind
        self.value = value
        self.position = position
        self.comments = list(comments)
    def __repr__(self):
        return f"LexResult({self.kind}, {self.value!r}, comments={len(self.comments)})"


def _lark_parser(name="tokens"):
    """Get globally shared lark parser.

    Args:
        name: (str) name of the grammar file (without .lark)

    Returns:
        (lark.Lark) Parser instance
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"lark/{name}.lark"
    parser = lark.Lark.open(path, rel_to=__file__, parser="lalr", lexer="basic")
    _parsers[name] = parser
    return parser


def _comment_text(token):
    if token.type == "BLOCK_COMMENT":
        return token.value[2:-2]
    return token.value[2:]


def _end_position(content, filename):
    line = content.count("\n") + 1
    column = len(content) - content.rfind("\n")
    return SourcePosition(filename, line, column, line, column)


def lex(content, filename=None):
    """Lazily tokenize source text.

    Tokens are only lexed as the caller pulls them, so a caller that stops
    early never pays for the rest of the file. Input the grammar cannot
    handle produces a single ERROR result and ends the stream.

    Args:
        content: (str) Source text
        filename: (str | None) Recorded in every position

    Yields:
        (LexResult) One per significant token, then a final EOF
    """
    pending = []
    stream = _lark_parser().lex(content, dont_ignore=True)
    try:
        for token in stream:
            if token.type in _SKIPPED:
                continue
            position = SourcePosition.from_token(token, filename)
            kind = _COMMENT_KINDS.get(token.type)
            if kind is not None:
                pending.append(Comment(position, kind, _comment_text(token)))
                continue
            yield LexResult(token.type, token.value, position, pending)
            pending = []
    except lark.UnexpectedCharacters as e:
        # The lexer cannot resume after this, so the error token is the last one
        position = SourcePosition(filename, e.line, e.column, e.line, e.column + 1)
        yield LexResult(ERROR, content[e.pos_in_stream:e.pos_in_stream + 1], position, pending)
        return
    yield LexResult(EOF, "", _end_position(content, filename), pending)

"""
Docblock Pragma Extraction

Reads the leading comment of a JavaScript source file and reports the
file-level directives it holds: the type checking mode, @preventMunge,
@providesModule, and whether the file is a declaration file.
"""

__version__ = "0.1.0"


from ._position import *
from ._error import *
from ._lexer import Comment, LexResult, lex
from ._scan import *
from ._docblock import *

"""
Test cases for extracting docblocks from source text.

PARSER EXPECTATIONS:
- docblock.extract('/* @flow */') -> ([], Docblock(flow=FlowMode.OPT_IN))
- docblock.extract('x; /* @flow */') -> ([], DEFAULT_DOCBLOCK)
- Filenames ending in .flow are declaration files
"""

import pytest

import docblock
from docblock import FlowMode, ErrorKind


@pytest.mark.parametrize("source,flow", [
    ("/* @flow */", FlowMode.OPT_IN),
    ("/**\n * @flow weak\n */\nvar x = 1;", FlowMode.OPT_IN_WEAK),
    ("// @noflow\nmodule.exports = {};", FlowMode.OPT_OUT),
    ("/* nothing to see */", None),
    ("", None),
])
def test_flow_modes(source, flow):
    """Flow modes from the leading comment."""
    errors, info = docblock.extract(source)
    assert errors == []
    assert info.flow is flow


def test_no_leading_comment():
    """Code before the comment means there is no docblock."""
    errors, info = docblock.extract("var x = 1;\n/* @flow */")
    assert errors == []
    assert info == docblock.DEFAULT_DOCBLOCK


def test_use_babel_before_docblock():
    """A leading directive string is tolerated."""
    errors, info = docblock.extract('"use babel";\n/** @flow */\n')
    assert errors == []
    assert info.flow is FlowMode.OPT_IN


def test_several_leading_comments():
    """Every comment before the first token is read."""
    source = "// Copyright\n/* @providesModule Foo */\n/* @flow */\nfoo();"
    errors, info = docblock.extract(source)
    assert errors == []
    assert info.provides_module == "Foo"
    assert info.flow is FlowMode.OPT_IN


def test_comments_after_first_token_ignored():
    """Only the comments on the first commented token count."""
    source = "/* @flow */ x /* @noflow */"
    errors, info = docblock.extract(source)
    assert errors == []
    assert info.flow is FlowMode.OPT_IN


def test_duplicate_flow():
    """A repeated flow directive keeps the first and reports one error."""
    errors, info = docblock.extract("/* @flow */\n/* @noflow */\n", "a.js")
    assert info.flow is FlowMode.OPT_IN
    assert len(errors) == 1
    assert errors[0].kind is ErrorKind.MULTIPLE_FLOW_ATTRIBUTES
    assert errors[0].position.filename == "a.js"
    assert errors[0].position.start_line == 2


def test_duplicate_provides_module():
    """A repeated module name keeps the first and reports one error."""
    errors, info = docblock.extract("/**\n * @providesModule Foo\n * @providesModule Bar\n */")
    assert info.provides_module == "Foo"
    assert [e.kind for e in errors] == [ErrorKind.MULTIPLE_PROVIDES_MODULE_ATTRIBUTES]


def test_prevent_munge_repeats_silently():
    """@preventMunge twice, in one or several comments, is fine."""
    errors, info = docblock.extract("/* @preventMunge @preventMunge */ // @preventMunge\n")
    assert errors == []
    assert info.prevent_munge is True


def test_provides_module_without_name():
    """A dangling @providesModule does nothing."""
    errors, info = docblock.extract("/* @providesModule */")
    assert errors == []
    assert info.provides_module is None


@pytest.mark.parametrize("filename,expected", [
    ("lib/types.js.flow", True),
    ("lib/types.flow", True),
    ("lib/types.js", False),
    ("lib/flow.js", False),
    (None, False),
])
def test_declaration_file(filename, expected):
    """Declaration files are recognized by suffix alone."""
    errors, info = docblock.extract("/* @noflow */", filename)
    assert info.is_declaration_file is expected
    assert info.flow is FlowMode.OPT_OUT


def test_declaration_file_without_docblock():
    """The suffix check happens even when there is no comment."""
    errors, info = docblock.extract("export type T = number;", "t.js.flow")
    assert errors == []
    assert info == docblock.Docblock(is_declaration_file=True)


def test_declaration_ext_override():
    """The declaration suffix can be changed per call."""
    errors, info = docblock.extract("", "types.d.ts", declaration_ext=".d.ts")
    assert info.is_declaration_file is True


def test_budget_limits_leading_strings():
    """Too many leading strings exhaust the budget."""
    source = '"a"; ' * 6 + "/* @flow */ x"
    assert docblock.extract(source, max_tokens=10)[1] == docblock.DEFAULT_DOCBLOCK
    assert docblock.extract(source, max_tokens=13)[1].flow is FlowMode.OPT_IN


def test_budget_truncates_comments():
    """Comments past the remaining budget are dropped."""
    source = '"a"; /* @flow */ /* @providesModule A */ /* @preventMunge */ x'
    errors, info = docblock.extract(source, max_tokens=4)
    assert info == docblock.Docblock(FlowMode.OPT_IN, None, "A", False)


def test_plain_token_ends_search():
    """Code ahead of the comment ends the search at the first token."""
    source = "a b c d e f g h i j k\n/** @flow */"
    errors, info = docblock.extract(source, max_tokens=10)
    assert (errors, info) == ([], docblock.DEFAULT_DOCBLOCK)


def test_budget_runs_out_on_semicolons():
    """Ten empty statements use up the default budget before the docblock."""
    source = ";" * 10 + "\n/** @flow */"
    assert docblock.extract(source) == ([], docblock.DEFAULT_DOCBLOCK)
    assert docblock.extract(source, max_tokens=11)[1].flow is FlowMode.OPT_IN


def test_unterminated_comment_is_docblock():
    """A block comment left open still provides directives."""
    errors, info = docblock.extract("/* @flow\nfoo")
    assert errors == []
    assert info.flow is FlowMode.OPT_IN


def test_lex_error_after_docblock():
    """A lexing failure right after the docblock does not lose it."""
    errors, info = docblock.extract("/* @flow */ 'unterminated")
    assert info.flow is FlowMode.OPT_IN


def test_lex_error_before_docblock():
    """A lexing failure before any comment means there is no docblock."""
    errors, info = docblock.extract("'unterminated\n/* @flow */")
    assert info == docblock.DEFAULT_DOCBLOCK


def test_bytes_content():
    """Byte content is decoded as UTF-8."""
    errors, info = docblock.extract("\ufeff/* @flow */".encode("utf-8"))
    assert info.flow is FlowMode.OPT_IN


def test_extraction_is_repeatable():
    """Identical inputs give identical results."""
    source = "/* @flow */\n/* @flow weak @providesModule X @providesModule Y */"
    first = docblock.extract(source, "x.js")
    second = docblock.extract(source, "x.js")
    assert first == second
    assert len(first[0]) == 2


def test_extract_file(tmp_path):
    """Files are read and their path used as the filename."""
    path = tmp_path / "decl.js.flow"
    path.write_text("/**\n * @flow\n * @flow\n */\n", encoding="utf-8")
    errors, info = docblock.extract_file(path)
    assert info.flow is FlowMode.OPT_IN
    assert info.is_declaration_file is True
    assert errors[0].position.filename == str(path)


@pytest.mark.parametrize("flow,expected", [
    (FlowMode.OPT_IN, True),
    (FlowMode.OPT_IN_WEAK, True),
    (FlowMode.OPT_OUT, False),
    (None, False),
])
def test_is_flow(flow, expected):
    """Only opt-in modes count as flow files."""
    assert docblock.Docblock(flow=flow).is_flow is expected


def test_json_of_docblock():
    """Debug structure uses plain values."""
    info = docblock.Docblock(FlowMode.OPT_IN_WEAK, True, "Foo", False)
    assert docblock.json_of_docblock(info) == {
        "flow": "OptInWeak",
        "preventMunge": True,
        "providesModule": "Foo",
        "isDeclarationFile": False,
    }


def test_json_of_default():
    """Absent fields come out as None."""
    assert docblock.DEFAULT_DOCBLOCK.to_json() == {
        "flow": None,
        "preventMunge": None,
        "providesModule": None,
        "isDeclarationFile": False,
    }

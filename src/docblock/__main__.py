#!/usr/bin/env python3
"""Docblock CLI - report the docblock directives of source files.

Usage:
    docblock <file.js> ...              # Show extracted metadata as JSON
    docblock <file.js> --tokens         # Show the leading token stream
    docblock "/* @flow */" --text       # Extract from source text
"""

import argparse
import json
import pathlib
import sys
from pathlib import Path

import docblock


def prettytokens(source, filename=None, max_tokens=docblock.MAX_TOKENS, show_positions=False):
    """Print the tokens the comment search would look at."""
    for index, result in enumerate(docblock.lex(source, filename)):
        if index >= max_tokens:
            print(f"... (stopped after {max_tokens} tokens)")
            break
        pos = ""
        if show_positions:
            pos = f" @{result.position.start_line}:{result.position.start_column}"
        value = repr(result.value) if len(result.value) < 60 else repr(result.value[:57] + "...")
        print(f"{result.kind}: {value}{pos}")
        for comment in result.comments:
            text = comment.text.strip()
            text = repr(text) if len(text) < 60 else repr(text[:57] + "...")
            cpos = ""
            if show_positions:
                cpos = f" @{comment.position.start_line}:{comment.position.start_column}"
            print(f"  {comment.kind} comment: {text}{cpos}")


def report(name, errors, info):
    """Build the JSON report for one source."""
    return {
        "file": name,
        "docblock": info.to_json(),
        "errors": [
            {"kind": error.kind.value, "message": error.message,
             "line": error.position.start_line, "column": error.position.start_column}
            for error in errors
        ],
    }


def print_json(data, rich=False):
    if rich:
        import rich.console
        rich.console.Console().print_json(data=data)
    else:
        print(json.dumps(data, indent=2))


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="docblock",
        description="Report docblock directives of JavaScript source files")
    parser.add_argument("sources", nargs="+",
        help="Source files to read")
    parser.add_argument("--text", action="store_true",
        help="Treat the single source as source text instead of a path")
    parser.add_argument("--tokens", action="store_true",
        help="Show the leading token stream instead of the metadata")
    parser.add_argument("--pos", action="store_true",
        help="Show line:column positions with --tokens")
    parser.add_argument("--max-tokens", type=int, default=docblock.MAX_TOKENS,
        help=f"Most tokens to examine (default {docblock.MAX_TOKENS})")
    parser.add_argument("--strict", action="store_true",
        help="Exit with status 2 when any directive is repeated")
    parser.add_argument("--rich", action="store_true",
        help="Use rich formatting for JSON output")

    args = parser.parse_args(argv)

    if args.text and len(args.sources) != 1:
        parser.error("--text takes exactly one source")

    inputs = []
    if args.text:
        inputs.append((None, args.sources[0]))
    else:
        for source in args.sources:
            filepath = pathlib.Path(source)
            if not filepath.is_absolute():
                filepath = Path.cwd() / filepath
            try:
                inputs.append((source, filepath.read_text(encoding="utf-8")))
            except (OSError, UnicodeDecodeError) as e:
                print(f"Error reading {source}:", file=sys.stderr)
                print(f"  {type(e).__name__}: {e}", file=sys.stderr)
                return 1

    if args.tokens:
        for name, content in inputs:
            if len(inputs) > 1:
                print(f"== {name}")
            prettytokens(content, name, args.max_tokens, show_positions=args.pos)
        return 0

    reports = []
    found_errors = False
    for name, content in inputs:
        errors, info = docblock.extract(content, name, max_tokens=args.max_tokens)
        for error in errors:
            print(f"Warning: {error}", file=sys.stderr)
        found_errors = found_errors or bool(errors)
        reports.append(report(name, errors, info))

    print_json(reports[0] if len(reports) == 1 else reports, rich=args.rich)
    if args.strict and found_errors:
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

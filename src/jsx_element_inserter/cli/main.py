"""Main CLI entry point for the jsx-insert command-line tool.

Reads a file holding one JSX element, inserts a new element into the first
element matching the target options and writes the resulting JSX (or a JSON
report) to stdout or a file.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsx_element_inserter.insertion import (
    Append,
    AtLogicalIndex,
    ElementDescription,
    InsertionRequest,
    InsertionResult,
    PositionSpec,
    Prepend,
    insert_into_first_match,
    match_attribute,
    match_tag,
)
from jsx_element_inserter.insertion.api import ElementPredicate
from jsx_element_inserter.parsing import parse_jsx_fragment
from jsx_element_inserter.shared.config import ConfigError, InserterConfig
from jsx_element_inserter.shared.errors import InsertionError
from jsx_element_inserter.shared.logging import configure_logging, get_logger
from jsx_element_inserter.tree.generator import generate

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


class CLIUsageError(Exception):
    """Raised when option values cannot be turned into a request."""


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser for jsx-insert."""
    parser = argparse.ArgumentParser(
        prog="jsx-insert",
        description="Insert an element into a JSX element's children.",
    )
    parser.add_argument("source", help="File holding one JSX element, or '-' for stdin")

    target = parser.add_mutually_exclusive_group()
    target.add_argument("--target-tag", help="Insert into the first element with this tag")
    target.add_argument(
        "--target-attr",
        help="Insert into the first element with NAME or NAME=VALUE attribute",
    )

    content = parser.add_mutually_exclusive_group(required=True)
    content.add_argument("--code", help="JSX code block to insert")
    content.add_argument("--tag", help="Tag name of the element to build")
    content.add_argument("--request", type=Path, help="JSON file holding an insertion request")

    parser.add_argument(
        "--attr", action="append", default=[], metavar="NAME=VALUE",
        help="String attribute for --tag (repeatable)",
    )
    parser.add_argument(
        "--json-attr", action="append", default=[], metavar="NAME=JSON",
        help="Attribute for --tag whose value is parsed as JSON (repeatable)",
    )
    parser.add_argument("--text", help="Text content for --tag")

    position = parser.add_mutually_exclusive_group()
    position.add_argument("--append", action="store_true", help="Insert after all children")
    position.add_argument("--prepend", action="store_true", help="Insert before all children")
    position.add_argument(
        "--index", type=int, metavar="N",
        help="Insert as the N-th element child, counting elements and fragments only",
    )

    parser.add_argument("--output", "-o", type=Path, help="Write output to file")
    parser.add_argument(
        "--format", choices=["jsx", "json"], default="jsx",
        help="Output format (default: jsx)",
    )
    parser.add_argument("--config", type=Path, help="JSON configuration file")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Errors only")
    return parser


def _split_pair(raw: str, option: str) -> List[str]:
    if "=" not in raw:
        raise CLIUsageError(f"{option} expects NAME=VALUE, got '{raw}'")
    name, value = raw.split("=", 1)
    if not name:
        raise CLIUsageError(f"{option} expects a non-empty NAME")
    return [name, value]


def build_position(args: argparse.Namespace) -> Optional[PositionSpec]:
    """Get the position chosen on the command line, or None if none was given."""
    if args.prepend:
        return Prepend()
    if args.index is not None:
        return AtLogicalIndex(index=args.index)
    if args.append:
        return Append()
    return None


def build_request(args: argparse.Namespace) -> InsertionRequest:
    """Turn command-line options into an InsertionRequest."""
    position = build_position(args)

    if args.request is not None:
        try:
            data = json.loads(args.request.read_text(encoding="utf-8"))
            request = InsertionRequest.from_dict(data)
        except (OSError, json.JSONDecodeError, ValueError, TypeError) as e:
            raise CLIUsageError(f"Could not load request {args.request}: {e}") from e
        if position is not None:
            request = InsertionRequest(
                description=request.description,
                code_block=request.code_block,
                position=position,
            )
        return request

    position = position or Append()
    if args.code is not None:
        return InsertionRequest(code_block=args.code, position=position)

    attributes: Dict[str, Any] = {}
    for raw in args.attr:
        name, value = _split_pair(raw, "--attr")
        attributes[name] = value
    for raw in args.json_attr:
        name, value = _split_pair(raw, "--json-attr")
        try:
            attributes[name] = json.loads(value)
        except json.JSONDecodeError as e:
            raise CLIUsageError(f"--json-attr {name} is not valid JSON: {e}") from e

    description = ElementDescription(
        tag_name=args.tag, attributes=attributes, text_content=args.text
    )
    return InsertionRequest(description=description, position=position)


def build_predicate(args: argparse.Namespace) -> ElementPredicate:
    """Turn target options into a predicate; default is the root, element or fragment."""
    if args.target_tag:
        return match_tag(args.target_tag)
    if args.target_attr:
        if "=" in args.target_attr:
            name, value = _split_pair(args.target_attr, "--target-attr")
            return match_attribute(name, value)
        return match_attribute(args.target_attr)
    return lambda element: True


def load_config(path: Optional[Path]) -> InserterConfig:
    """Load configuration from a JSON file, or the defaults."""
    if path is None:
        return InserterConfig.default()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CLIUsageError(f"Could not read config file {path}: {e}") from e
    return InserterConfig.from_json(text)


def format_output(source: str, result: InsertionResult, output_format: str) -> str:
    """Render the new source, or a JSON report holding it."""
    if output_format == "json":
        return json.dumps({"source": source, "result": result.summary()}, indent=2)
    return source


def _read_source(raw: str) -> str:
    if raw == "-":
        return sys.stdin.read()
    try:
        return Path(raw).read_text(encoding="utf-8")
    except OSError as e:
        raise CLIUsageError(f"Could not read {raw}: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    logger = get_logger(__name__, None, "cli")

    try:
        config = load_config(args.config)
        if args.verbose:
            configure_logging("DEBUG")
        elif args.quiet:
            configure_logging("ERROR")
        else:
            configure_logging(config.global_.logging_level)

        request = build_request(args)
        predicate = build_predicate(args)
        root = parse_jsx_fragment(_read_source(args.source))
        result = insert_into_first_match(root, predicate, request, config=config)
    except (CLIUsageError, ConfigError, InsertionError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if result is None:
        print("Error: no element matched the target", file=sys.stderr)
        return EXIT_NO_MATCH

    output = format_output(generate(root), result, args.format)
    if args.output:
        try:
            args.output.write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            logger.error("Could not write output", extra={"output": str(args.output)})
            print(f"Error writing output: {e}", file=sys.stderr)
            return EXIT_ERROR
    else:
        print(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

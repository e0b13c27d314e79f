"""Main CLI entry point for the xml-editor command-line tool.

Every command reads one input file and writes its result to ``-o`` or to
standard output::

    xml-editor verify -i sample.xml -f -o fixed.xml
    xml-editor compress -i sample.xml -o sample.comp
    xml-editor search -i sample.xml --topic economy
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from xml_editor import __version__
from xml_editor.api import XMLEditor
from xml_editor.codec import to_hex_string
from xml_editor.shared import ConfigError, EditorConfig, OperationResult, configure_logging
from xml_editor.tokenization import VALID_MESSAGE

# Command name -> editor operation name
COMMANDS = {
    "verify": "verify",
    "fix": "fix",
    "format": "format",
    "json": "json",
    "mini": "mini",
    "compress": "compress",
    "decompress": "decompress",
    "draw": "draw",
    "most-active": "most_active",
    "most-influencer": "most_influencer",
    "mutual": "mutual",
    "suggest": "suggest",
    "search": "search",
}

COMMAND_HELP = {
    "verify": "Check XML structure and report errors",
    "fix": "Repair structural errors",
    "format": "Pretty-print with indentation",
    "json": "Convert XML to JSON",
    "mini": "Remove insignificant whitespace",
    "compress": "Compress to a binary artifact",
    "decompress": "Restore text from a binary artifact",
    "draw": "Export the follower graph (DOT text, or an image with -o)",
    "most-active": "Show the user following the most users",
    "most-influencer": "Show the user with the most followers",
    "mutual": "List users following all given users",
    "suggest": "Suggest users to follow for a user",
    "search": "Search posts by word or topic",
}


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-editor",
        description="Verify, repair, format, convert and compress XML documents"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for command, help_text in COMMAND_HELP.items():
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "-i", "--input",
            type=Path,
            required=True,
            help="Input file"
        )
        sub.add_argument(
            "-o", "--output",
            type=Path,
            help="Output file (default: standard output)"
        )

        if command == "verify":
            sub.add_argument(
                "-f", "--fix",
                action="store_true",
                help="Write the repaired document instead of the input"
            )
        elif command in ("compress", "decompress"):
            sub.add_argument(
                "--hex",
                action="store_true",
                help="Use space-separated hex text for the compressed side"
            )
        elif command == "mutual":
            sub.add_argument(
                "--ids",
                required=True,
                help="Comma-separated user ids (e.g. 1,2,3)"
            )
        elif command == "suggest":
            sub.add_argument(
                "--id",
                dest="user_id",
                required=True,
                help="User id"
            )
        elif command == "search":
            target = sub.add_mutually_exclusive_group(required=True)
            target.add_argument("--word", "-w", help="Word to find in post bodies")
            target.add_argument("--topic", "-t", help="Post topic to match")

    return parser


def read_input(args: argparse.Namespace) -> Union[str, bytes]:
    """Read the input file in the mode the command expects."""
    if args.command == "compress":
        return args.input.read_bytes()
    if args.command == "decompress" and not args.hex:
        return args.input.read_bytes()
    return args.input.read_text(encoding="utf-8")


def operation_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Operation keyword options derived from command arguments."""
    if args.command == "verify":
        return {"fix": args.fix}
    if args.command == "mutual":
        return {"ids": [user_id.strip() for user_id in args.ids.split(",") if user_id.strip()]}
    if args.command == "suggest":
        return {"user_id": args.user_id}
    if args.command == "search":
        return {"word": args.word} if args.word is not None else {"topic": args.topic}
    if args.command == "draw" and args.output is not None:
        return {"output_path": args.output}
    return {}


def write_output(args: argparse.Namespace, result: OperationResult) -> None:
    """Write a successful result to the output file or standard output."""
    payload = result.payload
    if result.is_binary and (args.hex or args.output is None):
        payload = to_hex_string(payload) + "\n"

    if args.output is None:
        if args.command == "verify" and not args.fix:
            return
        print(payload, end="" if payload.endswith("\n") else "\n")
    elif isinstance(payload, bytes):
        args.output.write_bytes(payload)
    else:
        args.output.write_text(payload, encoding="utf-8")


def cmd_operation(args: argparse.Namespace, editor: XMLEditor) -> int:
    """Run one editor operation for the parsed command."""
    try:
        payload = read_input(args)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        return 1

    result = editor.run(COMMANDS[args.command], payload, **operation_options(args))
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if args.command == "verify":
        print(result.summary, end="" if result.summary.endswith("\n") else "\n")
    elif result.summary and not args.quiet:
        print(result.summary, file=sys.stderr)

    # draw already wrote its image to the output path
    if args.command == "draw" and args.output is not None:
        return 0

    try:
        write_output(args, result)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    if args.command == "verify" and not args.fix and result.summary.strip() != VALID_MESSAGE:
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = EditorConfig.from_file(args.config) if args.config else EditorConfig()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Set up logging verbosity
    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.global_.logging_level)

    try:
        return cmd_operation(args, XMLEditor(config))
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())

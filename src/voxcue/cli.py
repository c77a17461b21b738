"""CLI entrypoint for voxcue."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from voxcue.config import load_config
from voxcue.core import process_transcript
from voxcue.cues import DEFAULT_TAG_TABLE
from voxcue.errors import NonEnglishTranscriptError, VoxcueError
from voxcue.io import to_json, write_json
from voxcue.languages import detect_language
from voxcue.logging_utils import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Create the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="voxcue",
        description="Voice transcript cleanup and language flagging.",
    )
    subparsers = parser.add_subparsers(dest="command")

    process = subparsers.add_parser("process", help="Clean a transcript and extract cues")
    process.add_argument("text", help="Raw transcript text")
    _add_english_only_flag(process)
    process.add_argument(
        "--reject-non-english",
        action="store_true",
        help="Exit with an error when the transcript is flagged as non-English",
    )
    process.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON path. If omitted, prints to stdout.",
    )

    detect = subparsers.add_parser("detect", help="Print the detected transcript language")
    detect.add_argument("text", help="Raw transcript text")
    _add_english_only_flag(detect)

    subparsers.add_parser("tags", help="List recognized non-verbal tags")

    serve = subparsers.add_parser("serve", help="Run the voxcue HTTP API")
    serve.add_argument("--host", default=None, help="Override API host")
    serve.add_argument("--port", type=int, default=None, help="Override API port")

    return parser


def _add_english_only_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--english-only",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Flag non-English input (default: configured english_only_mode)",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = load_config()
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    setup_logging(config.log_level)

    if args.command == "detect":
        english_only = config.english_only_mode if args.english_only is None else args.english_only
        print(detect_language(args.text, english_only))
        return 0

    if args.command == "process":
        english_only = config.english_only_mode if args.english_only is None else args.english_only
        try:
            result = process_transcript(args.text, english_only)
            if args.reject_non_english and result.is_non_english:
                raise NonEnglishTranscriptError(result.language or "Non-English")
            if args.output:
                write_json(result, args.output)
                print(f"Wrote transcript JSON to {args.output}")
            else:
                print(to_json(result))
        except (VoxcueError, OSError) as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 2
        if result.is_non_english:
            print(f"WARNING: non-English transcript detected ({result.language})", file=sys.stderr)
        return 0

    if args.command == "tags":
        for tag, mapping in DEFAULT_TAG_TABLE.items():
            print(f"{tag}\t{mapping.emoji}\t{mapping.label}")
        return 0

    if args.command == "serve":
        try:
            import uvicorn
        except ModuleNotFoundError:
            print(
                "`voxcue serve` requires uvicorn. Install project dependencies first.",
                file=sys.stderr,
            )
            return 1

        host = args.host or config.api_host
        port = args.port or config.api_port
        uvicorn.run(
            "voxcue.api:app",
            host=host,
            port=port,
            workers=config.workers,
            reload=False,
        )
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

"""CLI entrypoints for scout commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, TextIO

from .config import ConfigError, ScoutConfig, load_config
from .llm.runner import GenerationError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .postproc.report import render_generated, render_report
from .scanner import ScanError


def _add_common_options(parser: argparse.ArgumentParser, *, suppress_default: bool = False) -> None:
    default = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write debug-level logs to FILE.",
    )


def _add_target_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to scout (defaults to current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the result to FILE instead of the terminal.",
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Append to the output file instead of overwriting it.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .scout.yml file (defaults to the one inside PATH).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scout",
        description="Explain what a directory contains using heuristics and a local LLM.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Classify a directory and print the insight without calling the LLM.",
    )
    _add_common_options(scan_parser, suppress_default=True)
    _add_target_options(scan_parser)
    scan_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the insight as JSON.",
    )

    summarize_parser = subparsers.add_parser(
        "summarize",
        help="Run the full pipeline and print the generated summary.",
    )
    _add_common_options(summarize_parser, suppress_default=True)
    _add_target_options(summarize_parser)

    prompt_parser = subparsers.add_parser(
        "prompt",
        help="Print the prompt that would be sent to the LLM.",
    )
    _add_common_options(prompt_parser, suppress_default=True)
    _add_target_options(prompt_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_common_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    return parser


def _load_cli_config(args: argparse.Namespace) -> Optional[ScoutConfig]:
    config_path: Optional[Path] = getattr(args, "config", None)
    if config_path is None:
        return None
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")
    return load_config(config_path)


def _emit(text: str, output: Optional[Path], *, append: bool, stream: TextIO) -> None:
    if output is None:
        stream.write(text)
        return
    mode = "a" if append else "w"
    with output.open(mode, encoding="utf-8") as handle:
        handle.write(text)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for scout commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "serve":
        from .service.app import run_service

        run_service(host=args.host, port=args.port)
        return

    try:
        orchestrator = Orchestrator(config=_load_cli_config(args))
        if args.command == "summarize":
            outcome = orchestrator.run(args.path)
        else:
            outcome = orchestrator.inspect(args.path)
    except ScanError as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")
    except GenerationError as exc:
        parser.exit(1, f"scout summarize failed: {exc}\nRun with --verbose for more details.\n")

    to_file = args.output is not None
    if args.command == "scan":
        if args.json:
            text = json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False) + "\n"
        else:
            text = render_report(outcome.summary, outcome.insight)
    elif args.command == "prompt":
        text = outcome.prompt.text + "\n"
    else:
        text = render_generated(
            outcome.summary,
            outcome.insight,
            outcome.text or "",
            color=not to_file,
        )

    try:
        _emit(text, args.output, append=args.append, stream=sys.stdout)
    except OSError as exc:
        parser.exit(1, f"Unable to write {args.output}: {exc}\n")
    if to_file:
        print(f"Wrote {args.command} output to {args.output}")


if __name__ == "__main__":
    main(sys.argv[1:])

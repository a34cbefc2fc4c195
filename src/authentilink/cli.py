# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""AuthentiLink CLI: classify and features commands.

Usage:
    python -m authentilink classify [FILE ...] [--split-paragraphs] [--format json|table] [--stats]
    python -m authentilink features FILE
"""

from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path

from .config import DetectorConfig
from .detector import ClassificationService
from .errors import ConfigError
from .features import BUZZWORD_LEXICON, FORMAL_LEXICON, POLITENESS_LEXICON, extract_features
from .scoring import score_features

EXIT_OK = 0
EXIT_INPUT_ERROR = 2

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


def _require_cli_deps() -> None:
    """Check that CLI optional dependencies are installed."""
    try:
        from tabulate import tabulate  # noqa: F401
    except ImportError as e:
        print(
            f"Missing CLI dependency: {e.name}\nInstall with: pip install authentilink[cli]",
            file=sys.stderr,
        )
        sys.exit(EXIT_INPUT_ERROR)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _collect_texts(sources: list[str], split_paragraphs: bool) -> list[tuple[str, str]]:
    """Return (label, text) pairs.  Raises OSError on unreadable files."""
    out: list[tuple[str, str]] = []
    for source in sources or ["-"]:
        content = _read_source(source)
        label = "<stdin>" if source == "-" else source
        if split_paragraphs:
            paragraphs = [p for p in _PARAGRAPH_SPLIT_RE.split(content) if p.strip()]
            out.extend((f"{label}#{i}", p) for i, p in enumerate(paragraphs, 1))
        else:
            out.append((label, content))
    return out


def _preview(text: str, width: int = 40) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= width else flat[: width - 3] + "..."


def cmd_classify(args: argparse.Namespace, config: DetectorConfig) -> int:
    """Classify each input and print results."""
    if args.format == "table":
        _require_cli_deps()
    try:
        items = _collect_texts(args.files, args.split_paragraphs)
    except OSError as e:
        print(f"Cannot read input: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    service = ClassificationService(config)
    results = service.classify_many(text for _, text in items)

    if args.format == "table":
        from tabulate import tabulate

        rows = [
            [label, _preview(text), "AI" if r.is_ai else "human", f"{r.confidence:.2f}", r.method.value]
            for (label, text), r in zip(items, results)
        ]
        print(tabulate(rows, headers=["Source", "Text", "Verdict", "Confidence", "Method"], tablefmt="simple"))
        if args.stats:
            stats = service.get_stats()
            print(
                f"\nAnalyzed: {stats.total_analyzed}  AI: {stats.ai_detected}  "
                f"Human: {stats.human_detected}  Errors: {stats.errors}  Cache hit rate: {stats.cache_hit_rate}%"
            )
        return EXIT_OK

    payload: dict = {"results": [{"source": label, **r.to_dict()} for (label, _), r in zip(items, results)]}
    if args.stats:
        payload["stats"] = service.get_stats().to_dict()
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return EXIT_OK


def cmd_features(args: argparse.Namespace, config: DetectorConfig) -> int:
    """Print the extracted features and fired scoring rules for one input."""
    try:
        text = _read_source(args.file).strip()
    except OSError as e:
        print(f"Cannot read input: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    features = extract_features(text)
    breakdown = score_features(features)
    print(
        json.dumps(
            {
                "features": features.to_dict(),
                "score": breakdown.score,
                "signals": list(breakdown.signals),
                "lexicon_matches": {
                    lex.name: lex.matches(text) for lex in (FORMAL_LEXICON, BUZZWORD_LEXICON, POLITENESS_LEXICON)
                },
                "threshold": config.ai_threshold,
            },
            ensure_ascii=False,
            indent=2,
        )
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="authentilink", description="Local heuristic AI-text detector")
    parser.add_argument("--config", type=str, help="YAML config file (AUTHENTILINK_* env vars override it)")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Log level (default: WARNING)")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines on stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_classify = subparsers.add_parser("classify", help="Classify text files (stdin when none given)")
    p_classify.add_argument("files", nargs="*", help="Input files; '-' reads stdin")
    p_classify.add_argument(
        "--split-paragraphs", action="store_true", help="Classify each blank-line-separated paragraph"
    )
    p_classify.add_argument("--format", choices=["json", "table"], default="json", help="Output format")
    p_classify.add_argument("--stats", action="store_true", help="Append detector statistics")

    p_features = subparsers.add_parser("features", help="Show extracted features for one input")
    p_features.add_argument("file", help="Input file; '-' reads stdin")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    from .logging_config import configure

    configure(json_output=args.log_json, level=args.log_level)

    try:
        config = DetectorConfig.load(args.config)
    except (ConfigError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    commands = {"classify": cmd_classify, "features": cmd_features}
    try:
        return commands[args.command](args, config)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())

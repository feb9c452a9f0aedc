"""Command-line entry point for the authlint analyzer."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List

from .fixes import DeclineFixProvider, ExtractConstantFixProvider
from .host import Analyzer, ScanContext
from .result import ScanResult, format_summary_table
from .severity import Severity
from .utils import AnalyzerConfig, ConfigError, load_config
from .utils.config import DEFAULT_CONFIG_FILENAME

DEFAULT_SOURCE_DIRS = ("src",)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Flag literal string arguments passed to qualified calls in authentication code",
    )
    parser.add_argument(
        "--source",
        "-s",
        dest="source_dirs",
        action="append",
        default=[],
        help="File or directory of Python source to analyze (repeatable).",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILENAME,
        help="Path to the YAML settings file (ignored when missing).",
    )
    parser.add_argument(
        "--format",
        choices=["json"],
        default="json",
        help="Report format for file output (defaults to json).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Write the JSON report to this path instead of stdout.",
    )
    parser.add_argument(
        "--fail-on",
        dest="fail_on",
        choices=[severity.value.lower() for severity in Severity],
        default=None,
        help="Lowest severity that makes the scan fail (defaults to warning).",
    )
    parser.add_argument(
        "--suggest-fixes",
        dest="suggest_fixes",
        action="store_true",
        default=None,
        help="Attach extract-constant fix proposals to reported findings.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def run_scan(
    source_paths: Iterable[str],
    config: AnalyzerConfig | None = None,
) -> ScanResult:
    config = config or AnalyzerConfig()
    fix_provider = ExtractConstantFixProvider() if config.suggest_fixes else DeclineFixProvider()
    analyzer = Analyzer(fix_provider=fix_provider)
    context = ScanContext(source_paths=tuple(source_paths), exclude=config.exclude)
    result = ScanResult(fail_on=config.fail_on)
    analyzer.scan(context, result)
    return result


def write_output(result: ScanResult, output_path: str | None, report_format: str) -> None:
    summary = format_summary_table(result)
    print(summary)

    if report_format == "json":
        payload = json.dumps(result.to_dict(), indent=2)
        if output_path:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(payload, encoding="utf-8")
            print(f"\nReport written to {output_path}")
        else:
            print("\nJSON Report")
            print(payload)


def resolve_config(args: argparse.Namespace) -> AnalyzerConfig:
    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc
    if args.fail_on is not None:
        config = replace(config, fail_on=Severity.parse(args.fail_on))
    if args.suggest_fixes is not None:
        config = replace(config, suggest_fixes=args.suggest_fixes)
    return config


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = resolve_config(args)
    sources = args.source_dirs or list(DEFAULT_SOURCE_DIRS)
    result = run_scan(sources, config)
    write_output(result, args.output_path, args.format)
    return result.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

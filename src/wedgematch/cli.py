"""
Command-line interface for the wedge matcher.

Provides commands for matching a JSON path map and writing a default config.
"""

import argparse
import sys

from wedgematch.config import load_config, save_default_config
from wedgematch.tracer import configure_tracer, get_tracer


def build_parser():
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="wedgematch",
        description="Wedge matcher: reconstruct wedge strokes from vectorized paths",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Classify paths and match wedges")
    run_parser.add_argument(
        "--paths", "-p",
        required=True,
        help="JSON file mapping path ids to [[x, y], ...] point lists",
    )
    run_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output directory",
    )
    run_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    run_parser.add_argument(
        "--threshold", "-t",
        type=float,
        default=None,
        help="Override the line/curve classification threshold",
    )
    run_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    run_parser.add_argument(
        "--trace-level",
        default=None,
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    run_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    run_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="wedgematch_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "run":
        return handle_run(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def handle_run(args):
    """Handle the run command."""
    config = load_config(args.config)
    if args.threshold is not None:
        config.classifier.threshold = args.threshold

    tracing = config.tracing
    configure_tracer(
        enabled=args.trace or tracing.enabled,
        level=args.trace_level or tracing.level,
        file_path=args.trace_file or tracing.file_path,
        json_output=args.trace_json or tracing.json_output,
    )

    tracer = get_tracer()

    try:
        from wedgematch.io.artifacts import load_path_map
        from wedgematch.pipeline import run_pipeline
        from wedgematch.validate.report import generate_report

        with tracer.span("cli_run", module="cli"):
            paths = load_path_map(args.paths)
            result = run_pipeline(paths, config)
            generate_report(result, args.out)

        print(f"\nMatching completed.")
        print(f"  Paths: {len(paths)}")
        print(f"  Curves: {len(result.curve_ids)}  Lines: {len(result.line_ids)}")
        print(f"  Wedges: {len(result.match.wedges)}")
        print(f"  Unmatched curves: {len(result.unmatched)}")
        print(f"\nOutputs saved to: {args.out}/")
        print(f"  - match_result.json")
        print(f"  - validation_report.json")
        print(f"  - validation_summary.txt")

        if result.validation.has_errors:
            print(f"\n[!] Validation errors detected. Review validation_report.json")
            return 1

        return 0

    except Exception as e:
        tracer.event(f"Matching failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    finally:
        tracer.config.close()


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

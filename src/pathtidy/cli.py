"""
Command-line interface for pathtidy.

Simplifies path data strings and writes the result as JSON (and
optionally SVG), or writes a default configuration file.
"""

import argparse
import json
import sys

from pathtidy.config import load_config, save_default_config
from pathtidy.tracer import configure_tracer, get_tracer


def build_parser():
    parser = argparse.ArgumentParser(
        description="pathtidy: collapse U-turns and zig-zags in path data and drop duplicate paths",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    simplify_parser = subparsers.add_parser("simplify", help="Simplify path data")
    source = simplify_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--d",
        action="append",
        dest="path_data",
        help="Path data string (repeatable)",
    )
    source.add_argument(
        "--inputs", "-i",
        nargs="+",
        help="Text files with one path data string per line",
    )
    simplify_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    simplify_parser.add_argument(
        "--out", "-o",
        default=None,
        help="Write the JSON result here instead of stdout",
    )
    simplify_parser.add_argument(
        "--svg-out",
        default=None,
        help="Also write the simplified paths as an SVG file",
    )
    simplify_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    simplify_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    simplify_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="pathtidy_config.yaml",
        help="Output path for config file",
    )
    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "simplify":
        return handle_simplify(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    parser.print_help()
    return 0


def read_path_data(paths):
    """Non-empty lines of each file, in order."""
    path_data = []
    for path in paths:
        with open(path, "r", encoding="utf-8") as f:
            path_data.extend(line.strip() for line in f if line.strip())
    return path_data


def handle_simplify(args):
    """Handle the simplify command."""
    config = load_config(args.config)

    configure_tracer(
        enabled=args.trace or config.tracing.enabled,
        level=args.trace_level if args.trace else config.tracing.level,
        file_path=args.trace_file or config.tracing.file_path,
        json_output=config.tracing.json_output,
    )
    tracer = get_tracer()

    try:
        from pathtidy.pipeline import simplify_paths

        path_data = args.path_data if args.path_data else read_path_data(args.inputs)

        with tracer.span("cli_simplify", module="cli", paths=len(path_data)):
            result = simplify_paths(path_data, config)

        output = json.dumps(result.model_dump(mode="json"), indent=2)
        if args.out:
            with open(args.out, "w", encoding="utf-8") as f:
                f.write(output + "\n")
        else:
            print(output)

        if args.svg_out:
            from pathtidy.export.svg_emit import emit_paths_svg, save_svg

            drawing = emit_paths_svg(
                result.paths,
                stroke_width=config.output.stroke_width,
                stroke_color=config.output.stroke_color,
                margin=config.output.margin,
            )
            save_svg(drawing, args.svg_out)

        return 0

    except (OSError, ValueError) as e:
        tracer.event(f"Simplify failed: {str(e)}", level="ERROR")
        print(f"Error: {str(e)}", file=sys.stderr)
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

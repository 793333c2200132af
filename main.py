import argparse
import logging
import sys

import config_paths
from file_type_handler import FileTypeHandler
from formatter import read_and_format
from options import Options

try:
    from _version import __version__
except Exception:
    __version__ = "0.0.0"


def _separator_arg(value: str) -> str:
    if value == "\\t":
        return "\t"
    if len(value.encode("utf-8")) != 1:
        raise argparse.ArgumentTypeError("separator must be a single byte character")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csvgrid",
        description="csvgrid - format delimited text as a bordered table",
    )
    parser.add_argument("path", nargs="?", help="input file (stdin when omitted)")
    parser.add_argument("-s", "--separator", type=_separator_arg, default=None,
                        help="field separator (auto-detected from , ; | by default)")
    parser.add_argument("-b", "--border", type=int, choices=(0, 1, 2), default=None,
                        help="border style: 0 none, 1 single rule, 2 full box")
    parser.add_argument("--ascii", action="store_true", help="draw borders with ASCII characters")
    parser.add_argument("--force8bit", action="store_true", help="treat input as single-byte text")
    parser.add_argument("--double-header", action="store_true", help="double rule under the header")
    parser.add_argument("--title", default=None, help="title line printed above the table")
    parser.add_argument("--max-columns", type=int, default=None, help="column count limit")
    parser.add_argument("--verbose", action="store_true", help="log diagnostics to stderr")
    parser.add_argument("-v", "-V", "--version", action="version", version=__version__)
    return parser


def options_from_args(args, cfg: dict) -> Options:
    return Options.from_config(
        cfg,
        separator=args.separator,
        border_type=args.border,
        force_ascii_art=True if args.ascii else None,
        force8bit=True if args.force8bit else None,
        double_header=True if args.double_header else None,
        title=args.title,
        max_columns=args.max_columns,
        pathname=args.path,
    )


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    options = options_from_args(args, config_paths.load_config())

    if args.path:
        try:
            result = FileTypeHandler(args.path).format(options)
        except OSError as exc:
            print(f"Load failed: {exc}", file=sys.stderr)
            sys.exit(1)
    else:
        result = read_and_format(sys.stdin.buffer, options)

    if not result.ok:
        print(f"Load failed: {result.error}", file=sys.stderr)
        sys.exit(1)

    out = sys.stdout.buffer
    for line in result.desc.rows:
        out.write(line)
        out.write(b"\n")
    out.flush()


if __name__ == "__main__":
    main()

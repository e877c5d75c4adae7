"""Command-line entry point."""

from __future__ import annotations

import json
import logging
import os
import sys

from .compiler import EXTENSIONS, INTERNAL, INVALID, PHASES, TARGETS, compile_source
from .frontend.names import analyze
from .frontend.parse import parse
from .frontend.preprocess import preprocess
from .frontend.tokens import KEYWORDS, tokenize
from .serialize import ast_to_dict, symbols_to_dict, tokens_to_list

logger = logging.getLogger(__name__)

USAGE: str = """\
logicbridge [OPTIONS] [INPUT] [-o OUTPUT]

Options:
  --target TARGET     Output language: c, cpp, java, javascript, python
                      (default: python)
  --stop-at PHASE     Stop after phase: preprocess, tokens, parse, names
  --json              Print the full compile response as JSON
  -o, --output FILE   Write output to FILE instead of stdout; a directory
                      receives generated_code.<ext>
  -v, --verbose       Log pipeline phases to stderr
  -h, --help          Show this help message
"""

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERNAL = 3


class Options:
    """Parsed command-line options."""

    def __init__(self) -> None:
        self.target: str = "python"
        self.stop_at: str | None = None
        self.as_json: bool = False
        self.verbose: bool = False
        self.input_file: str | None = None
        self.output_file: str | None = None


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", EXIT_FAILED)
    else:
        raw = sys.stdin.buffer.read()
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("error: invalid utf-8 in input", file=sys.stderr)
        return ("", EXIT_FAILED)
    return (source, EXIT_OK)


def output_path(output_file: str, target: str) -> str:
    """A directory gets generated_code.<ext>; anything else is used as is."""
    if os.path.isdir(output_file):
        return os.path.join(output_file, "generated_code." + EXTENSIONS[target])
    return output_file


def write_output(output: str, output_file: str | None, target: str) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        path = output_path(output_file, target)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError:
            print("error: cannot write '" + path + "'", file=sys.stderr)
            return EXIT_FAILED
        return EXIT_OK
    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")
    return EXIT_OK


def to_json(obj: object) -> str:
    return json.dumps(obj, indent=2)


def _print_errors(errors: list[object]) -> None:
    """Print errors to stderr as error:LINE: message."""
    for e in errors:
        print(str(e), file=sys.stderr)


def _format_error(line: object, message: object) -> str:
    return "error:" + str(line) + ": " + str(message)


def run_phases(source: str, stop_at: str) -> tuple[int, str]:
    """Run the frontend up to stop_at. Returns (exit_code, output)."""
    normalized = preprocess(source, KEYWORDS)
    if stop_at == "preprocess":
        return (EXIT_OK, normalized)
    tokens = tokenize(normalized, KEYWORDS)
    if stop_at == "tokens":
        return (EXIT_OK, to_json(tokens_to_list(tokens)))
    parsed = parse(tokens)
    if not parsed.ok():
        _print_errors([_format_error(e.line, e.message) for e in parsed.errors])
        return (EXIT_FAILED, "")
    if stop_at == "parse":
        return (EXIT_OK, to_json(ast_to_dict(parsed.ast)))
    names = analyze(parsed.ast)
    if not names.ok():
        _print_errors([_format_error(v.line, v.message) for v in names.errors()])
        return (EXIT_FAILED, "")
    return (EXIT_OK, to_json(symbols_to_dict(names.table)))


def run_pipeline(source: str, target: str, as_json: bool) -> tuple[int, str]:
    """Compile source to target. Returns (exit_code, output)."""
    result = compile_source(source, target)
    if result.status == INTERNAL:
        print("error: " + result.message + ": " + str(result.errors[0]["message"]), file=sys.stderr)
        return (EXIT_INTERNAL, to_json(result.to_dict()) if as_json else "")
    if result.status == INVALID:
        print("error: " + result.message, file=sys.stderr)
        return (EXIT_USAGE, "")
    if as_json:
        code = EXIT_OK if result.ok() else EXIT_FAILED
        return (code, to_json(result.to_dict()))
    if not result.ok():
        _print_errors([_format_error(e["line"], e["message"]) for e in result.errors])
        return (EXIT_FAILED, "")
    return (EXIT_OK, result.generated_code)


def parse_args(args: list[str]) -> Options:
    """Parse command-line arguments; exits with status 2 on a usage error."""
    opts = Options()
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(EXIT_OK)
        elif arg == "--target":
            if i + 1 >= len(args):
                print("error: --target requires an argument", file=sys.stderr)
                sys.exit(EXIT_USAGE)
            opts.target = args[i + 1]
            i += 2
        elif arg == "--stop-at":
            if i + 1 >= len(args):
                print("error: --stop-at requires an argument", file=sys.stderr)
                sys.exit(EXIT_USAGE)
            opts.stop_at = args[i + 1]
            i += 2
        elif arg == "-o" or arg == "--output":
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                sys.exit(EXIT_USAGE)
            opts.output_file = args[i + 1]
            i += 2
        elif arg == "--json":
            opts.as_json = True
            i += 1
        elif arg == "-v" or arg == "--verbose":
            opts.verbose = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(EXIT_USAGE)
        else:
            if opts.input_file is not None:
                print("error: unexpected argument '" + arg + "'", file=sys.stderr)
                sys.exit(EXIT_USAGE)
            if arg != "-":
                opts.input_file = arg
            i += 1
    if opts.stop_at is not None and opts.stop_at not in PHASES:
        print("error: unknown phase '" + opts.stop_at + "'", file=sys.stderr)
        sys.exit(EXIT_USAGE)
    if opts.target not in TARGETS:
        print("error: unknown target '" + opts.target + "'", file=sys.stderr)
        sys.exit(EXIT_USAGE)
    return opts


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    opts = parse_args(sys.argv[1:] if argv is None else argv)
    if opts.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
        )
    source, err = read_source(opts.input_file)
    if err != EXIT_OK:
        return err
    if source.strip() == "":
        print("error: no input provided", file=sys.stderr)
        return EXIT_USAGE
    if opts.stop_at is not None:
        exit_code, output = run_phases(source, opts.stop_at)
    else:
        exit_code, output = run_pipeline(source, opts.target, opts.as_json)
    logger.debug("exit code %d", exit_code)
    if len(output) > 0:
        written = write_output(output, opts.output_file, opts.target)
        if written != EXIT_OK:
            return written
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

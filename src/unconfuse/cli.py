"""
Command-Line Interface (CLI) for Unconfuse
Primary interface for analysts working in terminals
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .core.analyzer import SCORING_STRATEGIES
from .core.decode_presets import PresetLibrary
from .core.engine import DecodeConfig, DecodeEngine
from .core.exceptions import ConfigurationError
from .utils.report_generator import ReportGenerator, printable

EXIT_UNSUPPORTED = 2

LICENSE_TEXT = """MIT License

Copyright (c) 2023 Yvain Ramora

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE."""


class Colors:
    """ANSI color codes (blanked when color is disabled)"""
    GREY = '\033[90m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    RED = '\033[31m'
    RESET = '\033[0m'

    def __init__(self, enabled: bool = True):
        if not enabled:
            self.GREY = self.GREEN = self.YELLOW = self.RED = self.RESET = ''


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser"""
    parser = argparse.ArgumentParser(
        prog='unconfuse',
        description='Unconfuse - Recover concealed string literals from obfuscated JavaScript',
        epilog='example: unconfuse -i obfuscated.js'
    )

    # Input (one of)
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        '-i', '--input',
        type=str,
        metavar='FILE',
        help='Obfuscated JavaScript file to decode'
    )
    source.add_argument(
        '-d', '--decode',
        type=str,
        metavar='STRING',
        help='Decode a single literal directly'
    )
    source.add_argument(
        '-l', '--license',
        action='store_true',
        help='Show the license and exit'
    )

    # Optional arguments
    parser.add_argument(
        '--level',
        type=int,
        default=2,
        metavar='N',
        help='Variant level for -d (1 = base-91, other = 5-bit packing; default: 2)'
    )

    parser.add_argument(
        '--preset',
        type=str,
        choices=PresetLibrary.list_presets(),
        help='Plausibility preset (default: balanced settings)'
    )

    parser.add_argument(
        '--scoring',
        type=str,
        choices=sorted(SCORING_STRATEGIES),
        help='Scoring strategy for the plausibility check (default: adjacent)'
    )

    parser.add_argument(
        '--ceiling',
        type=float,
        metavar='N.N',
        help='Plausibility ceiling (default: scoring strategy default)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=1,
        metavar='N',
        help='Decode candidates on N threads (default: 1)'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output JSON only (machine-readable)'
    )

    parser.add_argument(
        '--report',
        type=str,
        metavar='FILE',
        help='Also write a Markdown report to FILE'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging and tracebacks'
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'Unconfuse v{__version__}'
    )

    return parser


def build_config(args) -> DecodeConfig:
    """Turn parsed arguments into a DecodeConfig"""
    overrides = {'max_workers': args.workers}
    if args.scoring:
        overrides['scoring'] = args.scoring
    if args.ceiling is not None:
        overrides['plausibility_ceiling'] = args.ceiling

    if args.preset:
        return DecodeConfig.from_preset(args.preset, **overrides)
    return DecodeConfig(**overrides)


def main(argv=None):
    """
    Main CLI entry point

    Handles argument parsing and coordinates the decoding workflow
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.license:
        print(LICENSE_TEXT)
        sys.exit(0)

    colors = Colors(enabled=not args.no_color and not args.json and sys.stdout.isatty())

    if not args.input and args.decode is None:
        print(f"{colors.RED}[!] Error: You need to provide an input file or a string to decode{colors.RESET}",
              file=sys.stderr)
        print(f"{colors.YELLOW}    example: unconfuse -i obfuscated.js{colors.RESET}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        engine = DecodeEngine(build_config(args))

        if args.input:
            input_path = Path(args.input)
            if not input_path.is_file():
                print(f"{colors.RED}[!] Error: Input file not found: {args.input}{colors.RESET}", file=sys.stderr)
                sys.exit(1)
            if not args.json:
                print(f"[*] Decoding strings in: {input_path.name}")
            report = engine.decode_file(input_path)
        else:
            report = engine.decode_string(args.decode, level=args.level)

        if args.report:
            report_path = Path(args.report)
            report_path.write_text(ReportGenerator().generate_markdown(report, report.source), encoding='utf-8')
            if not args.json:
                print(f"[+] Markdown report: {report_path}")

        if args.json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            print_report(report, colors)

        if not report.supported:
            sys.exit(EXIT_UNSUPPORTED)

    except KeyboardInterrupt:
        print(f"\n\n[!] Decoding interrupted by user", file=sys.stderr)
        sys.exit(130)

    except (ConfigurationError, OSError) as e:
        print(f"{colors.RED}[!] Error: {e}{colors.RESET}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)


def print_report(report, colors: Colors):
    """Print decode results as ciphertext -> (score) -> plaintext lines"""
    if not report.supported:
        print(f"{colors.RED}[!] This input was not obfuscated by the supported tool "
              f"(no variant fingerprint found){colors.RESET}")
        return

    for result in report.results:
        if result.resolved:
            print(f"{colors.GREY}'{printable(result.ciphertext)}'{colors.RESET} -> "
                  f"{colors.GREY}(score : {colors.YELLOW}{result.confidence:.4f}{colors.GREY}){colors.RESET} -> "
                  f"{colors.GREEN}'{printable(result.plaintext)}'{colors.RESET}")
        else:
            print(f"{colors.GREY}(unresolved, score : {colors.YELLOW}{result.literal_score:.4f}"
                  f"{colors.GREY}){colors.RESET} -> '{printable(result.plaintext)}'")

    resolved = sum(1 for r in report.results if r.resolved)
    print(f"\n[+] {resolved} of {report.candidates_found} literals resolved "
          f"(level {report.level}, {report.skipped} malformed)")


if __name__ == '__main__':
    main()

#!/usr/bin/env python3
"""
namegen CLI
===========
Command-line interface for pattern-based name generation.

Usage:
    namegen generate "!BVs" -n 10
    namegen generate --preset elven --seed 0x2a --table
    namegen check "<ba"
    namegen classes
    namegen presets
"""

import argparse
import json
import logging
import sys

from namegen import __version__
from namegen.settings import get_setting, get_int_setting


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def info(self, msg: str):
        """Status line on stderr, keeping stdout for names."""
        if not self.quiet:
            print(msg, file=sys.stderr)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            print(f"OK: {msg}")


def parse_seed(value: str) -> int:
    """argparse type for seeds: decimal or 0x-prefixed hex, nonzero."""
    try:
        seed = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {value!r}")
    if seed & 0xFFFFFFFF == 0:
        raise argparse.ArgumentTypeError("seed must have nonzero low 32 bits")
    return seed


def non_negative(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return number


def configure_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else get_setting('logging.level', 'WARNING')
    logging.basicConfig(
        level=level,
        format=get_setting('logging.format', '%(levelname)s %(name)s: %(message)s'),
        stream=sys.stderr,
    )


def _report_syntax_error(e, out: Output):
    out.error(str(e))
    print(e.pointer(), file=sys.stderr)


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names from a pattern or preset."""
    from namegen import NameGen, PatternSyntaxError, get_pattern

    if args.preset:
        pattern = get_pattern(f"preset:{args.preset}")
    elif args.pattern:
        pattern = args.pattern
    else:
        out.error("a PATTERN or --preset is required")
        return 2

    gen = NameGen(
        seed=args.seed,
        capacity=args.capacity,
        max_retries=args.retries,
        fragments=args.fragments,
    )
    start = gen.state

    try:
        names = gen.generate(
            pattern,
            count=args.count,
            unique=not args.allow_duplicates,
        )
    except PatternSyntaxError as e:
        _report_syntax_error(e, out)
        return 1

    if args.verbose:
        out.info(f"pattern: {pattern}")
        out.info(f"seed: 0x{start:08x}  next: 0x{gen.state:08x}")

    if args.json:
        print(json.dumps({
            'pattern': pattern,
            'seed': start,
            'next_seed': gen.state,
            'capacity': gen.capacity,
            'names': [
                {
                    'name': n.name,
                    'seed': n.seed,
                    'outcome': n.outcome.name,
                    'attempts': n.attempts,
                }
                for n in names
            ],
        }, indent=2))
    elif args.table:
        from namegen.ui import names_table, print_table
        print_table(names_table(names, show_seed=args.verbose))
    else:
        for n in names:
            print(n.name)

    return 0


def cmd_check(args, out: Output):
    """Strictly validate a pattern."""
    from namegen import NameGen, get_pattern

    pattern = get_pattern(args.pattern)
    # The seed is irrelevant for validation
    report = NameGen(seed=1, fragments=args.fragments).check(pattern)

    if not report.valid:
        _report_syntax_error(report.error, out)
        return 1

    out.success(f"{pattern!r} is valid")
    if report.markers:
        out.print(f"Substitutions: {' '.join(report.markers)}")
    else:
        out.print("Substitutions: none")
    return 0


def cmd_classes(args, out: Output):
    """List substitution classes."""
    from namegen.generators import load_fragments
    from namegen.ui import classes_table, print_table

    fragments = load_fragments(args.fragments)
    if args.json:
        print(json.dumps([
            {
                'marker': cls.marker,
                'description': cls.description,
                'count': len(cls),
                'fragments': list(cls.fragments),
            }
            for cls in fragments.classes
        ], indent=2))
        return 0

    if not out.quiet:
        print_table(classes_table(fragments))
    return 0


def cmd_presets(args, out: Output):
    """List pattern presets."""
    from namegen import list_presets
    from namegen.ui import presets_table, print_table

    presets = list_presets()
    if args.json:
        print(json.dumps(presets, indent=2))
        return 0

    if not out.quiet:
        print_table(presets_table(presets))
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='namegen',
        description='namegen - Pattern-Based Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate "!BVs" -n 10
  %(prog)s generate "!s<v|V>(dim)" --seed 42 -c 12
  %(prog)s generate --preset elven -n 5 --table -v
  %(prog)s check "<i|Cd>D<d|i>"
  %(prog)s classes
  %(prog)s presets
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('pattern', nargs='?', help='Pattern or preset name')
    p.add_argument('--preset', '-p', help='Use a named preset')
    p.add_argument('-n', '--count', type=non_negative,
                   default=get_int_setting('generation.count', 10),
                   help='Number of names (default: %(default)s)')
    p.add_argument('--seed', type=parse_seed,
                   help='Starting seed, decimal or 0x hex (default: NAMEGEN_SEED or random)')
    p.add_argument('--capacity', '-c', type=non_negative,
                   help='Output capacity including terminator (default: %s)'
                        % get_int_setting('generation.capacity', 32))
    p.add_argument('--retries', type=non_negative,
                   help='Retries after truncation (default: %s)'
                        % get_int_setting('generation.max_retries', 8))
    p.add_argument('--fragments', help='Custom fragment dictionary (YAML)')
    p.add_argument('--allow-duplicates', action='store_true', help='Keep duplicate names')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')
    p.add_argument('--table', '-t', action='store_true', help='Output as a table')
    p.add_argument('--verbose', '-v', action='store_true', help='Show seeds and debug logging')

    # --- check ---
    p = subparsers.add_parser('check', aliases=['c'], help='Validate a pattern')
    p.add_argument('pattern', help='Pattern or preset name')
    p.add_argument('--fragments', help='Custom fragment dictionary (YAML)')

    # --- classes ---
    p = subparsers.add_parser('classes', help='List substitution classes')
    p.add_argument('--fragments', help='Custom fragment dictionary (YAML)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- presets ---
    p = subparsers.add_parser('presets', help='List pattern presets')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'c': 'check',
    }
    command = cmd_map.get(args.command, args.command)

    configure_logging(verbose=getattr(args, 'verbose', False))

    # Output handler
    out = Output(quiet=getattr(args, 'quiet', False))

    # Dispatch
    commands = {
        'generate': cmd_generate,
        'check': cmd_check,
        'classes': cmd_classes,
        'presets': cmd_presets,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except (ValueError, FileNotFoundError) as e:
            out.error(str(e))
            if getattr(args, 'verbose', False):
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())

# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Command-line interface for banksf2.

Provides subcommands:
- convert: build a SoundFont from an expanded bank directory
- inspect: print the structure of a SoundFont file

`main` is also the console_scripts entry point.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .compiler import SF2Compiler
from .constants import GENERATOR_NAMES
from .loader import load_bank_directory
from .parser import SF2Parser


def _build_root_parser():
    p = argparse.ArgumentParser(prog="banksf2", description="Convert sound banks to SoundFont 2")
    sub = p.add_subparsers(dest="command", required=True)

    c_convert = sub.add_parser("convert", help="Convert a bank directory into a SoundFont file")
    c_convert.add_argument("input_directory", help="Input directory with bank.json and its wave files")
    c_convert.add_argument("output_file", nargs="?", help="Output SoundFont file path (default: <input_dir_name>.sf2)")
    c_convert.add_argument("-f", "--force", action="store_true", help="Force overwrite without confirmation")
    c_convert.add_argument("-n", "--name", help="Bank name written to the INFO chunk (default: name from bank.json)")

    c_inspect = sub.add_parser("inspect", help="Print the presets, instruments and samples of a SoundFont file")
    c_inspect.add_argument("input_file", help="Input SoundFont file path")

    return p


def _convert(args):
    inp = Path(args.input_directory)
    out = Path(args.output_file) if args.output_file else inp.with_suffix(".sf2")

    # Warn if output file exists (unless --force is used)
    if out.exists() and not args.force:
        response = input(f"Warning: \"{out}\" already exists. Overwrite? (y/n): ")
        if response.lower() != "y":
            print("Conversion cancelled.")
            return 0

    bank = load_bank_directory(inp)

    print(f"Writing SoundFont file: {out}")
    size = SF2Compiler(bank, name=args.name).save(out)
    print(f"Conversion complete! ({size:,} bytes)")
    return 0


def _format_generator(gen):
    name = GENERATOR_NAMES.get(gen["oper"], f"gen{gen['oper']}")
    if name in ("keyRange", "velRange"):
        return f"{name}={gen['raw'] & 0xFF}-{gen['raw'] >> 8}"
    return f"{name}={gen['amount']}"


def _inspect(args):
    parser = SF2Parser(args.input_file).parse()

    print(f"File: {args.input_file}")
    for key, value in parser.info_data.items():
        print(f"  {key}: {value}")

    presets = parser.get_preset_headers()
    print(f"\nPresets ({len(presets)}):")
    for idx, preset in enumerate(presets):
        zones = parser.get_preset_zones(idx)
        gens = ", ".join(_format_generator(g) for zone in zones for g in zone["generators"])
        print(f"  {preset['bank']:03d}:{preset['preset']:03d} {preset['name']} [{gens}]")

    instruments = parser.get_instrument_headers()
    print(f"\nInstruments ({len(instruments)}):")
    for idx, inst in enumerate(instruments):
        zones = parser.get_instrument_zones(idx)
        print(f"  {idx}: {inst['name']} ({len(zones)} zones)")
        for zone in zones:
            print("    " + ", ".join(_format_generator(g) for g in zone["generators"]))

    samples = parser.get_sample_headers()
    print(f"\nSamples ({len(samples)}):")
    for idx, s in enumerate(samples):
        print(
            f"  {idx}: {s['name']} start={s['start']} end={s['end']} "
            f"loop={s['start_loop']}-{s['end_loop']} rate={s['sample_rate']} key={s['original_key']}"
        )
    return 0


def main(argv=None):
    """
    Generic entry point for `python -m banksf2` or the `banksf2` script.

    Returns exit code (0 on success).
    """
    argv = list(argv) if argv is not None else None
    parser = _build_root_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "convert":
            return _convert(args)
        elif args.command == "inspect":
            return _inspect(args)
        else:
            parser.print_help()
            return 2
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

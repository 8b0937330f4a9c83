# msws/cli.py
# Command line front end: print draws as text or write a raw byte stream.
#
#   msws-prng [--uint64 | --binary] [--decfmt] [<count> [<seed>]]

import argparse
import itertools
import logging
import os
import sys

from . import __version__, config
from .rng import MASK32, Generator
from .seeding import system_seed

logger = logging.getLogger('msws.cli')

INFINITE = 0

EPILOG = """\
NOTE: The same 'seed' value always re-generates the same sequence. Use
different 'seed' values to generate different sequences. If the 'seed' value
is *not* specified, a pseudo-random 'seed' is requested from the system.

Middle Square Weyl Sequence algorithm: Copyright (c) 2014-2017 Bernard Widynski
Extensions (bounded, 64-Bit and byte output): Copyright (c) 2017 LoRd_MuldeR <mulder2@gmx.de>

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.
"""


def uint32_arg(value):
    """Decimal or 0x-prefixed hex, wrapped to 32 bits like an unsigned cast."""
    try:
        number = int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'") from exc
    return number & MASK32


def build_parser():
    parser = argparse.ArgumentParser(
        prog='msws-prng',
        description=f"Middle Square Weyl Sequence Random Number Generator v{__version__}",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # the last of --uint64 / --binary wins
    parser.add_argument('--uint64', dest='mode', action='store_const', const='uint64',
                        help='Output unsigned 64-Bit numeric values (default: unsigned 32-Bit)')
    parser.add_argument('--binary', dest='mode', action='store_const', const='binary',
                        help='Output stream of "raw" bytes instead of printing numeric values')
    parser.add_argument('--decfmt', action='store_true',
                        default=(config.OUTPUT_FORMAT == 'dec'),
                        help='Output numeric values in decimal format (default: hexadecimal)')
    parser.add_argument('--log-level', default=config.LOG_LEVEL,
                        help='Logging level for diagnostics on stderr')
    parser.add_argument('count', nargs='?', type=uint32_arg, default=INFINITE,
                        help='Number of values or bytes to generate (default: infinite)')
    parser.add_argument('seed', nargs='?', type=uint32_arg, default=None,
                        help='Value to seed the PRNG (default: seed from system RNG)')
    parser.set_defaults(mode='uint32')
    return parser


def counter(count):
    if count == INFINITE:
        return itertools.count()
    return range(count)


def write_numbers(out, count, width, draw, decimal):
    fmt = f"{{:0{width}d}}\n" if decimal else f"{{:0{width}X}}\n"
    for _ in counter(count):
        out.write(fmt.format(draw()))


def write_binary(rng, out, count, chunk=None):
    chunk = chunk or config.BUFF_SIZE
    buffer = bytearray(chunk)
    if count == INFINITE:
        while True:
            rng.fill_bytes(buffer)
            out.write(buffer)

    remain = count
    while remain > 0:
        size = min(remain, chunk)
        view = memoryview(buffer)[:size]
        rng.fill_bytes(view)
        out.write(view)
        remain -= size


def run(args, stdout):
    seed = args.seed if args.seed is not None else system_seed()
    logger.debug(f"mode={args.mode} count={args.count} seed={seed:08x}")
    rng = Generator(seed)
    if args.mode == 'binary':
        write_binary(rng, stdout.buffer, args.count)
        stdout.buffer.flush()
    elif args.mode == 'uint64':
        write_numbers(stdout, args.count, 16, rng.draw_u64, args.decfmt)
    else:
        write_numbers(stdout, args.count, 8, rng.draw_u32, args.decfmt)
    stdout.flush()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO))
    try:
        run(args, sys.stdout)
    except BrokenPipeError:
        # reader went away; silence the flush at interpreter exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    return 0


if __name__ == '__main__':
    sys.exit(main())

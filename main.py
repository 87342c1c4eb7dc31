import argparse
import logging
import math
import sys
import wave

import numpy as np

from fft import SpectrumTransform
from wav_io import load_wav, read_frame

DEMO_SIZE = 8
DEMO_BIN = 1
FRAME_SIZE = 1024
TOP_BINS = 5

EXIT_OK = 0
EXIT_READ_ERROR = 1
EXIT_BAD_SIZE = 2


def positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def non_negative_int(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def sine(size, frequency_bin):
    i = np.arange(size)
    return np.sin(2 * np.pi * frequency_bin * i / size).astype(np.float32)


def run_demo(args):
    samples = sine(args.size, args.bin)
    result = SpectrumTransform().transform(samples)
    if not result:
        print(f"Error: {result.error}")
        return EXIT_BAD_SIZE

    print(f"Sine at bin {args.bin} over {args.size} points")
    for i, (mag, ph) in enumerate(zip(result.magnitude, result.phase)):
        print(f"  bin {i}: magnitude={mag:.6f} phase={ph:.6f}")
    return EXIT_OK


def run_analyze(args):
    try:
        samples, rate = load_wav(args.path)
    except (OSError, EOFError, ValueError, wave.Error) as e:
        print(f"Error reading {args.path}: {e}")
        return EXIT_READ_ERROR

    frame = read_frame(samples, args.size, args.offset)
    result = SpectrumTransform().transform(frame)
    if not result:
        print(f"Error: {result.error}")
        return EXIT_BAD_SIZE

    freqs = result.frequencies(rate)
    bins = result.to_complex_bins()
    order = np.argsort(result.magnitude)[::-1][:args.top]
    print(f"{args.path}: {len(samples)} samples at {rate} Hz, frame {args.offset}..{args.offset + args.size}")
    for i in order:
        c = bins[i]
        db = c.power
        db_text = "-inf" if math.isinf(db) else f"{db:.2f}"
        print(f"  bin {i}: {freqs[i]:.1f} Hz  magnitude={c.magnitude:.6f}  power={db_text} dB")
    return EXIT_OK


def build_parser():
    parser = argparse.ArgumentParser(description="Radix-2 FFT magnitude/phase spectrum")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="transform a unit sine wave")
    demo.add_argument("--size", type=positive_int, default=DEMO_SIZE)
    demo.add_argument("--bin", type=int, default=DEMO_BIN)
    demo.set_defaults(func=run_demo)

    analyze = sub.add_parser("analyze", help="transform one frame of a WAV file")
    analyze.add_argument("path")
    analyze.add_argument("--size", type=positive_int, default=FRAME_SIZE)
    analyze.add_argument("--offset", type=non_negative_int, default=0)
    analyze.add_argument("--top", type=positive_int, default=TOP_BINS)
    analyze.set_defaults(func=run_analyze)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

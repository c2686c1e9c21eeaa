#!/usr/bin/env python3
"""
Lenient base64 decoder robustness harness.

Generates random payloads, encodes them with the canonical alphabet (by hand,
no base64 module), optionally strips padding and corrupts a fraction of the
symbols, then runs decode_raw / decode_display and tabulates how much of the
payload survives at each corruption rate.

Usage:
    python b64_test_harness.py
    python b64_test_harness.py --trials 1000 --max-len 256
    python b64_test_harness.py --rates 0 0.02 0.1 --no-pad
    python b64_test_harness.py --seed 7 --show 5        # print a few samples

Columns:
    Rate     fraction of symbols replaced with '#'
    Exact%   trials whose raw prefix equals the payload exactly
    ByteErr% mean fraction of payload bytes that came back wrong
    Eaten    trials where the display trim also removed genuine NUL bytes
    Invalid  mean invalid-symbol reports per trial

Requirements: pip install numpy
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from typing import List

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "gui"))

from b64_decoder import decode_raw, display_from_raw, trim_trailing_zeros


# ---------------------------------------------------------------------------
# Canonical encoder (reference only, the app never encodes)
# ---------------------------------------------------------------------------

ALPHABET     = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
CORRUPT_CHAR = "#"
DEFAULT_RATES = [0.0, 0.01, 0.05, 0.10, 0.25]


def encode_symbols(data: bytes, pad: bool = True) -> str:
    out = []
    for i in range(0, len(data), 3):
        chunk = data[i:i + 3]
        n = int.from_bytes(chunk.ljust(3, b"\0"), "big")
        syms = [ALPHABET[(n >> shift) & 0x3f] for shift in (18, 12, 6, 0)]
        keep = len(chunk) + 1
        out.extend(syms[:keep])
        if pad:
            out.append("=" * (4 - keep))
    return "".join(out)


def corrupt(symbols: str, rate: float, rng: np.random.Generator) -> str:
    if rate <= 0 or not symbols:
        return symbols
    hits = rng.random(len(symbols)) < rate
    return "".join(CORRUPT_CHAR if h else c for c, h in zip(symbols, hits))


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass
class Trial:
    rate:        float
    n_bytes:     int
    exact:       bool
    byte_errors: int
    eaten:       int     # payload NULs lost to the display trim
    invalid:     int
    symbols:     str
    display:     str


def run_trial(payload: bytes, rate: float, pad: bool, rng: np.random.Generator) -> Trial:
    symbols = corrupt(encode_symbols(payload, pad), rate, rng)
    invalid = []
    raw = decode_raw(symbols, on_invalid=lambda c, i: invalid.append(i))

    n    = len(payload)
    got  = np.frombuffer(raw[:n], dtype=np.uint8)
    want = np.frombuffer(payload, dtype=np.uint8)
    errors = int(np.count_nonzero(got != want))

    return Trial(
        rate        = rate,
        n_bytes     = n,
        exact       = errors == 0,
        byte_errors = errors,
        eaten       = sum(1 for b in payload[len(trim_trailing_zeros(raw)):] if b == 0),
        invalid     = len(invalid),
        symbols     = symbols,
        display     = display_from_raw(raw),
    )


def random_payload(rng: np.random.Generator, max_len: int, zero_tail: float) -> bytes:
    if max_len < 1:
        raise ValueError(f"max_len must be at least 1, got {max_len}")
    n = int(rng.integers(1, max_len + 1))
    data = rng.integers(0, 256, size=n, dtype=np.uint8)
    if rng.random() < zero_tail:
        data[-int(rng.integers(1, min(n, 4) + 1)):] = 0
    return data.tobytes()


# ---------------------------------------------------------------------------
# Print tables
# ---------------------------------------------------------------------------

def print_table(trials: List[Trial]) -> None:
    print(f"\n{'Rate':>6}  {'Trials':>6}  {'Exact%':>7}  {'ByteErr%':>8}  {'Eaten':>5}  {'Invalid':>7}")
    print("-" * 50)
    for rate in sorted(set(t.rate for t in trials)):
        sub    = [t for t in trials if t.rate == rate]
        exact  = 100.0 * np.mean([t.exact for t in sub])
        berr   = 100.0 * np.sum([t.byte_errors for t in sub]) / max(1, np.sum([t.n_bytes for t in sub]))
        eaten  = sum(1 for t in sub if t.eaten)
        inval  = np.mean([t.invalid for t in sub])
        print(f"{rate:>6.2f}  {len(sub):>6}  {exact:>7.1f}  {berr:>8.2f}  {eaten:>5}  {inval:>7.2f}")


def print_samples(trials: List[Trial], count: int) -> None:
    print("\nSamples:")
    for t in trials[:count]:
        print(f"  [{t.rate:.2f}] {t.symbols[:40]!r:<44} -> {t.display[:30]!r}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Robustness harness for the lenient base64 decoder",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--trials",    type=positive_int, default=200,           help="Trials per corruption rate")
    parser.add_argument("--max-len",   type=positive_int, default=64,            help="Maximum payload length in bytes")
    parser.add_argument("--rates",     type=float, nargs="+", default=DEFAULT_RATES, help="Symbol corruption rates")
    parser.add_argument("--zero-tail", type=float, default=0.1,           help="Fraction of payloads ending in NUL bytes")
    parser.add_argument("--seed",      type=int,   default=48,            help="RNG seed")
    parser.add_argument("--no-pad",    action="store_true",               help="Strip '=' padding before decoding")
    parser.add_argument("--show",      type=int,   default=0,             help="Print this many sample decodes")
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    pad = not args.no_pad

    print("Lenient base64 decoder harness")
    print(f"  Trials/rate : {args.trials}")
    print(f"  Payload len : 1–{args.max_len} bytes")
    print(f"  Padding     : {'kept' if pad else 'stripped'}")
    print(f"  Seed        : {args.seed}")

    trials: List[Trial] = []
    for rate in args.rates:
        for _ in range(args.trials):
            payload = random_payload(rng, args.max_len, args.zero_tail)
            trials.append(run_trial(payload, rate, pad, rng))

    print_table(trials)
    if args.show:
        print_samples(trials, args.show)


if __name__ == "__main__":
    main()

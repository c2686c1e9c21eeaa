#!/usr/bin/env python3
# b64_decoder.py  v1.0
"""
Lenient base64 decoder for the live preview window.

Two stages, both stateless:

  decode_raw(text)      : pack 6 bits per input character into a zeroed
                          buffer of ceil(len * 6 / 8) bytes. Invalid
                          characters contribute nothing but still advance
                          the bit cursor. '=' is an ordinary zero symbol.
  decode_display(text)  : decode_raw, strip the trailing zero bytes, lossy
                          UTF-8, then swap anything that is not printable
                          ASCII or a plain space for U+FFFD.

This is a preview, not a validator: nothing in here raises on bad input.
Partially typed text must always give *something* to look at.

Diagnostics:
  decode_raw() reports each invalid character through on_invalid(char, index).
  With no callback the message goes to stderr.
"""

import sys
from enum import Enum, auto

# ---------------------------------------------------------------------------
REPLACEMENT_CHAR = '\ufffd'
SYMBOL_BITS      = 6
PAD_CHAR         = '='


class ByteKind(Enum):
    PRINTABLE  = auto()
    SPACE      = auto()
    CONTROL    = auto()
    NON_ASCII  = auto()
    TRIMMED    = auto()


# ---------------------------------------------------------------------------
def decode_single(c):
    """6-bit value of one alphabet character, or None if it is not in it."""
    o = ord(c)
    if 0x41 <= o <= 0x5a:
        return o - 0x41
    if 0x61 <= o <= 0x7a:
        return o - 0x61 + 26
    if 0x30 <= o <= 0x39:
        return o - 0x30 + 52
    if c == '+':
        return 62
    if c == '/':
        return 63
    if c == PAD_CHAR:
        return 0
    return None


def raw_length(n_chars):
    total_bits = n_chars * SYMBOL_BITS
    return total_bits // 8 + (1 if total_bits % 8 else 0)


def _report_invalid(char, index):
    print(f"invalid char: '{char}'", file=sys.stderr)


def decode_raw(text, on_invalid=None):
    """
    Pack `text` into bytes, 6 bits per character, MSB first.

    A symbol starting at bit offset b lands in byte b // 8. With r = b % 8:
      r <= 2  fits in one byte, shifted left by 2 - r
      r  > 2  high 8 - r bits into this byte, the rest into the next,
              shifted left by 10 - r
    Neighbouring symbols never share a bit so OR is enough.
    """
    report = on_invalid or _report_invalid
    values = bytearray(raw_length(len(text)))

    current_bit = 0
    for index, c in enumerate(text):
        value = decode_single(c)
        if value is None:
            report(c, index)
        else:
            current_byte = current_bit // 8
            remainder    = current_bit % 8
            if remainder > 2:
                values[current_byte]     |= value >> (remainder - 2)
                values[current_byte + 1] |= (value << (10 - remainder)) & 0xff
            else:
                values[current_byte]     |= value << (2 - remainder)
        current_bit += SYMBOL_BITS

    return bytes(values)


def trim_trailing_zeros(raw):
    # Content-blind: genuine trailing NULs go too.
    end = len(raw)
    while end and raw[end - 1] == 0:
        end -= 1
    return raw[:end]


def _is_displayable(c):
    return c == ' ' or '!' <= c <= '~'


def sanitize(text):
    return ''.join(c if _is_displayable(c) else REPLACEMENT_CHAR for c in text)


def display_from_raw(raw):
    trimmed = trim_trailing_zeros(raw)
    return sanitize(trimmed.decode('utf-8', errors='replace'))


def decode_display(text, on_invalid=None):
    return display_from_raw(decode_raw(text, on_invalid))


def classify_bytes(raw):
    """One ByteKind per byte of an untrimmed buffer, for the hex view."""
    keep  = len(trim_trailing_zeros(raw))
    kinds = []
    for i, b in enumerate(raw):
        if i >= keep:
            kinds.append(ByteKind.TRIMMED)
        elif b == 0x20:
            kinds.append(ByteKind.SPACE)
        elif 0x21 <= b <= 0x7e:
            kinds.append(ByteKind.PRINTABLE)
        elif b >= 0x80:
            kinds.append(ByteKind.NON_ASCII)
        else:
            kinds.append(ByteKind.CONTROL)
    return kinds


def format_decode(text):
    """Two report lines for one input, ASCII-only so any console can print them."""
    raw = decode_raw(text)
    return [
        f"{ascii(text):>24} -> {ascii(display_from_raw(raw))}",
        f"{'':>24}    [{raw.hex(' ')}]  ({len(raw)} bytes)",
    ]


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    inputs = args or [line.rstrip('\r\n') for line in sys.stdin]
    for text in inputs:
        for line in format_decode(text):
            print(line)


# ---------------------------------------------------------------------------
if __name__ == '__main__':
    main()

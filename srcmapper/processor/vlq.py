"""Base64 VLQ encoding for freshly generated mapping segments."""

from collections.abc import Sequence

VLQ_SIGN_MASK = 0x01
VLQ_MORE_MASK = 0x20
VLQ_VALUE_MASK = 0x1F
VLQ_VALUE_BITWIDTH = 5
VLQ_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

# A segment is (generated column, source index, source line, source column[, name index]).
Segment = tuple[int, int, int, int] | tuple[int, int, int, int, int]


def encode_vlq(value: int) -> str:
    # Move sign to LSB
    value = ((-value) << 1 | VLQ_SIGN_MASK) if value < 0 else value << 1
    out = []
    while True:
        digit = value & VLQ_VALUE_MASK
        value >>= VLQ_VALUE_BITWIDTH
        if value > 0:
            digit |= VLQ_MORE_MASK
        out.append(VLQ_ALPHABET[digit])
        if value <= 0:
            return "".join(out)


def encode_mappings(lines: Sequence[Sequence[Segment]]) -> str:
    """Serialize absolute segments, grouped per generated line, into a mappings string.

    Generated columns are relative to the previous segment on the same line;
    every other field is relative to the previous segment in the whole map.
    """
    prev = [0, 0, 0, 0]
    encoded_lines = []
    for segments in lines:
        prev_column = 0
        encoded = []
        for segment in segments:
            fields = [segment[0] - prev_column]
            prev_column = segment[0]
            for i in range(1, len(segment)):
                fields.append(segment[i] - prev[i - 1])
                prev[i - 1] = segment[i]
            encoded.append("".join(encode_vlq(f) for f in fields))
        encoded_lines.append(",".join(encoded))
    return ";".join(encoded_lines)

"""
整数表的打包编码。

打包格式（16 位码元序列）::

    [length_high, length_low, offset, v0 - min_value, v1 - min_value, ...]

其中 ``min_value = min(0, min(values))``，``offset = -min_value``。
生成的码元再被转义为字符串字面量的若干行，每行最多 11 个码元。
"""
from typing import List

from .errors import ParserGeneratorError

UNITS_PER_LINE = 11
CONCAT_MARKER = " +"
TERMINATOR = ")"

MIN_VALUE = -0x8000
MAX_VALUE = 0x7fff


def encode(values) -> List[int]:
    """将整数数组编码为码元序列，取值须在有符号 16 位范围内"""
    min_value = 0
    for v in values:
        if not MIN_VALUE <= v <= MAX_VALUE:
            raise ParserGeneratorError(f"Table value {v!r} doesn't fit in 16 bits")
        if v < min_value:
            min_value = v

    length = len(values)
    units = [length >> 16, length & 0xffff, -min_value]
    units.extend(v - min_value for v in values)
    return units


def decode(units) -> List[int]:
    """encode 的逆运算"""
    length = (units[0] << 16) | units[1]
    min_value = -units[2]
    data = units[3:3 + length]
    if len(data) != length:
        raise ValueError(f"Packed table truncated: expected {length} values, got {len(data)}")
    return [u + min_value for u in data]


def decode_string(text) -> List[int]:
    """解码运行时得到的字符串（每个字符是一个码元）"""
    return decode([ord(c) for c in text])


def _escape_unit(unit):
    if unit < 256:
        return "\\%03o" % unit
    return "\\u%04x" % unit


def escape_for_literal(units) -> List[str]:
    """
    将码元序列转义成字符串字面量行。
    除最后一行以拼接标记结尾外，最后一行以语句结束标记结尾。
    """
    lines = []
    for i in range(0, len(units), UNITS_PER_LINE):
        chunk = units[i:i + UNITS_PER_LINE]
        encoded = '"' + "".join(_escape_unit(u) for u in chunk) + '"'
        if i + UNITS_PER_LINE < len(units):
            encoded += CONCAT_MARKER
        else:
            encoded += TERMINATOR
        lines.append(encoded)
    if not lines:
        lines.append('""' + TERMINATOR)
    return lines


def unescape_literal_lines(lines) -> List[int]:
    """解析 escape_for_literal 的输出，还原码元序列"""
    units = []
    for line in lines:
        if line.endswith(CONCAT_MARKER):
            line = line[:-len(CONCAT_MARKER)]
        elif line.endswith(TERMINATOR):
            line = line[:-len(TERMINATOR)]
        body = line.strip()
        if len(body) < 2 or body[0] != '"' or body[-1] != '"':
            raise ValueError(f"Not a packed table line: {line!r}")
        body = body[1:-1]
        idx = 0
        while idx < len(body):
            if body[idx] != "\\":
                raise ValueError(f"Unexpected character {body[idx]!r} in {line!r}")
            if body[idx + 1] == "u":
                units.append(int(body[idx + 2:idx + 6], 16))
                idx += 6
            else:
                units.append(int(body[idx + 1:idx + 4], 8))
                idx += 4
    return units

# Copyright 2024-present MongoDB, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""A pyparsing grammar for MongoDB shell literals.

Parses the relaxed JavaScript object syntax accepted by the MongoDB shell,
including the BSON constructor helpers it defines, into Python values built
from :mod:`bson` types::

    { _id: ObjectId('507f1f77bcf86cd799439011'), n: NumberLong(5), re: /ab+c/i }

Objects become :class:`dict` in source order, arrays become :class:`list`.
Anything the grammar cannot read raises
:class:`~bson_shell.errors.ShellSyntaxError`.
"""
from __future__ import annotations

import base64
import datetime
import re
import uuid
from typing import Any, Callable, Dict, List

import pyparsing as pp
from bson.binary import MD5_SUBTYPE, Binary
from bson.code import Code
from bson.dbref import DBRef
from bson.decimal128 import Decimal128
from bson.errors import BSONError
from bson.int64 import Int64
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp

from bson_shell.errors import ShellSyntaxError
from bson_shell.types import Double, Int32

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "0": "\0",
}

_ESCAPE_SEQUENCE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)

_SURROGATE = re.compile(r"[\ud800-\udfff]")

_LINE_CONTINUATIONS = frozenset(["\n", "\r", "\r\n", "\u2028", "\u2029"])


def _unescape_sequence(match: re.Match) -> str:
    seq = match.group(1)
    if len(seq) > 1 and seq[0] in "ux":
        if seq.startswith("u{"):
            return chr(int(seq[2:-1], 16))
        return chr(int(seq[1:], 16))
    if seq in _LINE_CONTINUATIONS:
        return ""
    return _ESCAPES.get(seq, seq)


def _unescape(body: str) -> str:
    text = _ESCAPE_SEQUENCE.sub(_unescape_sequence, body)
    if _SURROGATE.search(text):
        # Join \ud83d\ude00 style pairs into one code point.
        text = text.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")
    return text


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, not {value!r}")
    if isinstance(value, str):
        return int(value.strip(), 10)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, not {value!r}")
        return int(value)
    if isinstance(value, int):
        return int(value)
    raise TypeError(f"expected an integer, not {value!r}")


def _parse_iso(text: str) -> datetime.datetime:
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def _now() -> datetime.datetime:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _date(*args: Any) -> datetime.datetime:
    if not args:
        return _now()
    if len(args) == 1:
        if isinstance(args[0], str):
            return _parse_iso(args[0])
        return _EPOCH + datetime.timedelta(milliseconds=_to_int(args[0]))
    # Date(year, monthIndex, day, hours, minutes, seconds, ms), months from 0.
    fields = [_to_int(arg) for arg in args[:7]]
    fields += [1, 0, 0, 0, 0][len(fields) - 2 :]
    year, month, day, hour, minute, second, millis = fields
    return datetime.datetime(
        year, month + 1, day, hour, minute, second, millis * 1000, datetime.timezone.utc
    )


def _object_id(*args: Any) -> ObjectId:
    if args:
        return ObjectId(args[0])
    return ObjectId()


def _timestamp(*args: Any) -> Timestamp:
    if not args:
        return Timestamp(0, 0)
    if len(args) == 1 and isinstance(args[0], dict):
        return Timestamp(_to_int(args[0]["t"]), _to_int(args[0]["i"]))
    time, inc = args
    return Timestamp(_to_int(time), _to_int(inc))


def _bin_data(subtype: Any, data: str) -> Binary:
    return Binary(base64.b64decode(data, validate=True), _to_int(subtype))


def _hex_data(subtype: Any, data: str) -> Binary:
    return Binary(bytes.fromhex(data), _to_int(subtype))


def _md5(data: str) -> Binary:
    return Binary(bytes.fromhex(data), MD5_SUBTYPE)


def _uuid(*args: Any) -> Binary:
    if args:
        return Binary.from_uuid(uuid.UUID(args[0]))
    return Binary.from_uuid(uuid.uuid4())


def _reg_exp(pattern: Any, flags: str = "") -> Regex:
    if isinstance(pattern, Regex):
        if not flags:
            return pattern
        pattern = pattern.pattern
    return Regex(pattern, flags)


_CONSTRUCTORS: Dict[str, Callable[..., Any]] = {
    "ObjectId": _object_id,
    "ObjectID": _object_id,
    "ISODate": _date,
    "Date": _date,
    "NumberLong": lambda value: Int64(_to_int(value)),
    "Long": lambda value: Int64(_to_int(value)),
    "NumberInt": lambda value: Int32(_to_int(value)),
    "Int32": lambda value: Int32(_to_int(value)),
    "NumberDecimal": lambda value: Decimal128(str(value)),
    "Decimal128": lambda value: Decimal128(str(value)),
    "Double": lambda value: Double(float(value)),
    "Timestamp": _timestamp,
    "BinData": _bin_data,
    "HexData": _hex_data,
    "MD5": _md5,
    "UUID": _uuid,
    "Code": Code,
    "DBRef": DBRef,
    "MaxKey": MaxKey,
    "MinKey": MinKey,
    "RegExp": _reg_exp,
}

_NAMES: Dict[str, Callable[[], Any]] = {
    "true": lambda: True,
    "false": lambda: False,
    "null": lambda: None,
    "undefined": lambda: None,
    "NaN": lambda: float("nan"),
    "Infinity": lambda: float("inf"),
    "MaxKey": MaxKey,
    "MinKey": MinKey,
}


def _string_action(s: str, loc: int, toks: pp.ParseResults) -> List[Any]:
    try:
        return [_unescape(toks[0][1:-1])]
    except (OverflowError, ValueError) as exc:
        raise ShellSyntaxError(
            f"Invalid escape sequence: {exc}", s, pp.lineno(loc, s), pp.col(loc, s)
        ) from exc


def _number_action(s: str, loc: int, toks: pp.ParseResults) -> List[Any]:
    text = toks[0]
    body = text.lstrip("+-")
    if body[:2] in ("0x", "0X"):
        value = int(body, 16)
        return [-value if text[0] == "-" else value]
    if any(c in body for c in ".eE"):
        return [float(text)]
    try:
        return [int(text)]
    except ValueError as exc:
        # Decimal literals past sys.get_int_max_str_digits().
        raise ShellSyntaxError(
            f"Invalid number: {exc}", s, pp.lineno(loc, s), pp.col(loc, s)
        ) from exc


def _infinity_action(s: str, loc: int, toks: pp.ParseResults) -> List[Any]:
    return [float(toks[0][0] + "inf")]


def _regex_action(s: str, loc: int, toks: pp.ParseResults) -> List[Any]:
    body, _, flags = toks[0][1:].rpartition("/")
    return [Regex(body, flags)]


def _member_action(s: str, loc: int, toks: pp.ParseResults) -> List[Any]:
    return [(toks[0], toks[1])]


def _object_action(s: str, loc: int, toks: pp.ParseResults) -> List[Any]:
    return [dict(iter(toks))]


def _array_action(s: str, loc: int, toks: pp.ParseResults) -> List[Any]:
    return [list(iter(toks))]


def _call_action(s: str, loc: int, toks: pp.ParseResults) -> List[Any]:
    name = toks[0]
    if len(toks) == 1:
        if name not in _NAMES:
            raise ShellSyntaxError(f"Unknown identifier {name!r}", s, pp.lineno(loc, s), pp.col(loc, s))
        return [_NAMES[name]()]
    if name not in _CONSTRUCTORS:
        raise ShellSyntaxError(f"Unknown function {name!r}", s, pp.lineno(loc, s), pp.col(loc, s))
    args = list(iter(toks[1]))
    try:
        return [_CONSTRUCTORS[name](*args)]
    except (BSONError, KeyError, OverflowError, TypeError, ValueError) as exc:
        raise ShellSyntaxError(
            f"Invalid arguments to {name}: {exc}", s, pp.lineno(loc, s), pp.col(loc, s)
        ) from exc


def _make() -> pp.ParserElement:
    value = pp.Forward()
    comma = pp.Suppress(",")

    string = pp.Regex(r"\"(?:[^\"\\\n]|\\[\s\S])*\"|'(?:[^'\\\n]|\\[\s\S])*'")
    string.set_parse_action(_string_action)

    number = pp.Regex(r"[+-]?(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
    number.set_parse_action(_number_action)

    infinity = pp.Regex(r"[+-]Infinity\b")
    infinity.set_parse_action(_infinity_action)

    regex = pp.Regex(r"/(?![*/])(?:[^/\\\n]|\\.)+/[A-Za-z]*")
    regex.set_parse_action(_regex_action)

    identifier = pp.Regex(r"[A-Za-z_$][A-Za-z0-9_$]*")

    def listing(expr: pp.ParserElement) -> pp.ParserElement:
        return pp.Opt(expr + pp.ZeroOrMore(comma + expr) + pp.Opt(comma))

    args = pp.Group(pp.Suppress("(") + listing(value) + pp.Suppress(")"))
    call = pp.Opt(pp.Suppress(pp.Keyword("new"))) + identifier + pp.Opt(args)
    call.set_parse_action(_call_action)

    key = string | identifier | pp.Regex(r"\d+(?:\.\d+)?")
    member = key + pp.Suppress(":") + value
    member.set_parse_action(_member_action)

    obj = pp.Suppress("{") + listing(member) + pp.Suppress("}")
    obj.set_parse_action(_object_action)

    array = pp.Suppress("[") + listing(value) + pp.Suppress("]")
    array.set_parse_action(_array_action)

    value <<= obj | array | string | regex | infinity | number | call
    value.ignore(pp.cpp_style_comment)
    value.parse_with_tabs()
    return value


bnf = _make()


def parse(text: str) -> Any:
    """Parse a MongoDB shell literal into a Python value.

    Raises :class:`~bson_shell.errors.ShellSyntaxError` if `text` is not a
    valid literal.
    """
    if not isinstance(text, str):
        raise ShellSyntaxError(f"Expected a string, not {type(text).__name__}", None)
    try:
        return bnf.parse_string(text, parse_all=True)[0]
    except pp.ParseBaseException as exc:
        raise ShellSyntaxError(
            f"Invalid shell literal: {exc.msg}", text, exc.lineno, exc.col
        ) from exc
    except RecursionError as exc:
        raise ShellSyntaxError("Shell literal is nested too deeply", text) from exc

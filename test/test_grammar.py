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

"""Tests for the shell literal grammar."""
from __future__ import annotations

import datetime
import math
import sys
import uuid

sys.path[0:0] = [""]

from bson.binary import MD5_SUBTYPE, Binary
from bson.code import Code
from bson.dbref import DBRef
from bson.decimal128 import Decimal128
from bson.errors import InvalidId
from bson.int64 import Int64
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp
from bson.tz_util import utc

from bson_shell.errors import ShellSyntaxError
from bson_shell.grammar import parse
from bson_shell.types import Double, Int32
from test import unittest

OID = "507f1f77bcf86cd799439011"
UUID_STR = "3e9f6d6b-1c2a-4f5e-8a9b-0c1d2e3f4a5b"


class TestStructure(unittest.TestCase):
    def test_object(self):
        self.assertEqual(parse("{a: 1}"), {"a": 1})
        self.assertEqual(parse("{}"), {})
        self.assertEqual(
            parse("{ $gt: 5, 'x y': \"z\", 0: true, _id: null }"),
            {"$gt": 5, "x y": "z", "0": True, "_id": None},
        )

    def test_key_order(self):
        self.assertEqual(list(parse("{z: 1, a: 2, m: 3}")), ["z", "a", "m"])

    def test_duplicate_keys_keep_last(self):
        self.assertEqual(parse("{a: 1, a: 2}"), {"a": 2})

    def test_array(self):
        self.assertEqual(parse("[1, 'two', [3], {four: 4}]"), [1, "two", [3], {"four": 4}])
        self.assertEqual(parse("[]"), [])

    def test_trailing_commas(self):
        self.assertEqual(parse("[1, 2, ]"), [1, 2])
        self.assertEqual(parse("{a: 1,}"), {"a": 1})

    def test_comments(self):
        self.assertEqual(parse("{ a: 1, /* note */ b: 2 }"), {"a": 1, "b": 2})
        self.assertEqual(parse("{ a: 1, // note\n b: 2 }"), {"a": 1, "b": 2})

    def test_whitespace(self):
        self.assertEqual(parse("\n  { a :\t[ 1 ,2 ] }\n"), {"a": [1, 2]})


class TestScalars(unittest.TestCase):
    def test_strings(self):
        self.assertEqual(parse("'single'"), "single")
        self.assertEqual(parse('"double"'), "double")
        self.assertEqual(parse("'it\\'s'"), "it's")
        self.assertEqual(parse("'a\\nb\\tc\\\\'"), "a\nb\tc\\")
        self.assertEqual(parse("'caf\\u00e9 \\x41'"), "café A")
        self.assertEqual(parse("'\\ud83d\\ude00'"), "\U0001f600")
        self.assertEqual(parse("'\\u{1F600}'"), "\U0001f600")
        self.assertEqual(parse("'a\tb'"), "a\tb")

    def test_numbers(self):
        self.assertEqual(parse("42"), 42)
        self.assertEqual(parse("-42"), -42)
        self.assertEqual(parse("1.5"), 1.5)
        self.assertEqual(parse("-1.5e3"), -1500.0)
        self.assertEqual(parse(".5"), 0.5)
        self.assertEqual(parse("0x1F"), 31)
        self.assertEqual(parse("-0x10"), -16)
        self.assertIsInstance(parse("42"), int)
        self.assertIsInstance(parse("1e3"), float)

    def test_special_numbers(self):
        self.assertTrue(math.isnan(parse("NaN")))
        self.assertEqual(parse("Infinity"), float("inf"))
        self.assertEqual(parse("-Infinity"), float("-inf"))
        self.assertEqual(parse("+Infinity"), float("inf"))

    def test_literals(self):
        self.assertIs(parse("true"), True)
        self.assertIs(parse("false"), False)
        self.assertIsNone(parse("null"))
        self.assertIsNone(parse("undefined"))

    def test_regex_literal(self):
        self.assertEqual(parse("/ab+c/i"), Regex("ab+c", "i"))
        self.assertEqual(parse("/a\\/b/"), Regex("a\\/b"))
        self.assertEqual(parse("{name: /^jo/im}"), {"name": Regex("^jo", "im")})


class TestConstructors(unittest.TestCase):
    def test_object_id(self):
        self.assertEqual(parse(f"ObjectId('{OID}')"), ObjectId(OID))
        self.assertEqual(parse(f"new ObjectId(\"{OID}\")"), ObjectId(OID))
        self.assertEqual(parse(f"ObjectID('{OID}')"), ObjectId(OID))
        self.assertIsInstance(parse("ObjectId()"), ObjectId)

    def test_dates(self):
        expected = datetime.datetime(2020, 1, 2, 3, 4, 5, 678000, tzinfo=utc)
        self.assertEqual(parse("ISODate('2020-01-02T03:04:05.678Z')"), expected)
        self.assertEqual(parse("new Date('2020-01-02T03:04:05.678Z')"), expected)
        self.assertEqual(parse("ISODate('2020-01-02T05:04:05.678+02:00')"), expected)
        self.assertEqual(parse("ISODate('2020-01-02T03:04:05.678')"), expected)
        self.assertEqual(
            parse("ISODate('2020-01-02')"), datetime.datetime(2020, 1, 2, tzinfo=utc)
        )
        self.assertEqual(parse("new Date(0)"), datetime.datetime(1970, 1, 1, tzinfo=utc))
        self.assertEqual(
            parse("Date(2020, 0, 2, 3, 4, 5, 678)"), expected
        )
        self.assertEqual(parse("Date(2020, 11)"), datetime.datetime(2020, 12, 1, tzinfo=utc))

    def test_current_date(self):
        value = parse("ISODate()")
        self.assertIsInstance(value, datetime.datetime)
        self.assertEqual(value.microsecond % 1000, 0)
        self.assertEqual(value.tzinfo, datetime.timezone.utc)

    def test_numbers(self):
        self.assertEqual(parse("NumberLong(123)"), Int64(123))
        self.assertIsInstance(parse("NumberLong(123)"), Int64)
        self.assertEqual(
            parse("NumberLong('9223372036854775807')"), Int64(9223372036854775807)
        )
        self.assertEqual(parse("NumberInt('5')"), Int32(5))
        self.assertIsInstance(parse("NumberInt(5)"), Int32)
        self.assertEqual(parse("NumberDecimal('1.10')"), Decimal128("1.10"))
        self.assertEqual(parse("Decimal128('1.10')"), Decimal128("1.10"))
        self.assertIsInstance(parse("Double('1.5')"), Double)
        self.assertEqual(parse("Double(1.5)"), 1.5)

    def test_timestamp(self):
        self.assertEqual(parse("Timestamp({ t: 1, i: 2 })"), Timestamp(1, 2))
        self.assertEqual(parse("Timestamp(1, 2)"), Timestamp(1, 2))
        self.assertEqual(parse("Timestamp()"), Timestamp(0, 0))

    def test_binary(self):
        self.assertEqual(parse("BinData(0, 'AQIDBA==')"), Binary(b"\x01\x02\x03\x04", 0))
        self.assertEqual(parse("HexData(5, '0a0b')"), Binary(b"\x0a\x0b", 5))
        self.assertEqual(parse("MD5('0a0b')"), Binary(b"\x0a\x0b", MD5_SUBTYPE))

    def test_uuid(self):
        value = parse(f"UUID('{UUID_STR}')")
        self.assertEqual(value, Binary.from_uuid(uuid.UUID(UUID_STR)))
        self.assertEqual(value.subtype, 4)
        self.assertEqual(
            parse(f"UUID('{UUID_STR.replace('-', '')}')"), Binary.from_uuid(uuid.UUID(UUID_STR))
        )

    def test_code(self):
        self.assertEqual(parse("Code('return 1')"), Code("return 1"))
        self.assertEqual(parse("Code('return x', {x: 1})"), Code("return x", {"x": 1}))

    def test_dbref(self):
        self.assertEqual(
            parse(f"DBRef('coll', ObjectId('{OID}'), 'db')"), DBRef("coll", ObjectId(OID), "db")
        )
        self.assertEqual(parse("DBRef('coll', 5)"), DBRef("coll", 5))

    def test_min_max_key(self):
        self.assertEqual(parse("MaxKey()"), MaxKey())
        self.assertEqual(parse("MinKey()"), MinKey())
        self.assertEqual(parse("{a: MaxKey, b: MinKey}"), {"a": MaxKey(), "b": MinKey()})

    def test_reg_exp(self):
        self.assertEqual(parse('RegExp("a.b")'), Regex("a.b"))
        self.assertEqual(parse("RegExp(\"a.b\", 'im')"), Regex("a.b", "im"))
        self.assertEqual(parse("RegExp(/a.b/, 'i')"), Regex("a.b", "i"))

    def test_nested(self):
        self.assertEqual(
            parse(f"{{a: ObjectId('{OID}'), b: [1, NumberLong(2)]}}"),
            {"a": ObjectId(OID), "b": [1, Int64(2)]},
        )


class TestErrors(unittest.TestCase):
    def test_malformed(self):
        for text in ["{ not: valid", "{a: }", "[1, 2", "{a 1}", "", "   ", "1 2", "'open"]:
            with self.subTest(text=text):
                with self.assertRaises(ShellSyntaxError) as ctx:
                    parse(text)
                self.assertEqual(ctx.exception.text, text)

    def test_position(self):
        with self.assertRaises(ShellSyntaxError) as ctx:
            parse("{\n  a: }")
        self.assertEqual(ctx.exception.lineno, 2)

    def test_unknown_identifier(self):
        with self.assertRaisesRegex(ShellSyntaxError, "Unknown identifier 'valid'"):
            parse("{ not: valid }")

    def test_invalid_escape(self):
        with self.assertRaisesRegex(ShellSyntaxError, "Invalid escape sequence"):
            parse("'\\u{110000}'")
        with self.assertRaisesRegex(ShellSyntaxError, "Invalid escape sequence"):
            parse("'\\u{FFFFFFFFFFFFFFFFFFFFFF}'")
        self.assertEqual(parse("'\\ud800'"), "\ud800")

    @unittest.skipUnless(
        hasattr(sys, "set_int_max_str_digits"), "interpreter has no int digit limit"
    )
    def test_oversized_integer(self):
        with self.assertRaisesRegex(ShellSyntaxError, "Invalid number"):
            parse("[" + "9" * 5000 + "]")
        self.assertEqual(parse("0x" + "f" * 5000), int("f" * 5000, 16))

    def test_unknown_function(self):
        with self.assertRaisesRegex(ShellSyntaxError, "Unknown function 'Foo'"):
            parse("Foo(1)")

    def test_invalid_arguments(self):
        with self.assertRaises(ShellSyntaxError) as ctx:
            parse("ObjectId('zz')")
        self.assertIsInstance(ctx.exception.__cause__, InvalidId)
        for text in [
            "NumberInt(4294967296)",
            "NumberLong(1.5)",
            "NumberLong(true)",
            "BinData(0, '***')",
            "Timestamp({t: 1})",
            "ISODate('yesterday')",
            "MaxKey(1)",
            "Code(5)",
        ]:
            with self.subTest(text=text):
                self.assertRaises(ShellSyntaxError, parse, text)

    def test_not_a_string(self):
        self.assertRaises(ShellSyntaxError, parse, None)
        self.assertRaises(ShellSyntaxError, parse, b"{}")


if __name__ == "__main__":
    unittest.main()

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

"""Render BSON values as MongoDB shell literals.

Each entry of the formatter table renders one value without recursing into
its structure. Lookups are by the tag returned by
:func:`~bson_shell.classify.get_type_descriptor`; tags without an entry are
left to the structural stringifier in :mod:`bson_shell.stringify`.

.. doctest::

   >>> from bson import ObjectId
   >>> from bson_shell.formatters import format_leaf
   >>> format_leaf(ObjectId("507f1f77bcf86cd799439011"))
   "ObjectId('507f1f77bcf86cd799439011')"
"""
from __future__ import annotations

import base64
import datetime
import json
import re
from typing import Any, Callable, Dict, Optional

from bson import json_util
from bson.binary import UUID_SUBTYPE, UuidRepresentation
from bson.datetime_ms import DatetimeMS
from bson.errors import InvalidBSON
from bson.objectid import ObjectId

from bson_shell.classify import get_type_descriptor


def _code(v: Any) -> str:
    if v.scope is not None:
        return "Code('{}',{})".format(v, json_util.dumps(v.scope, separators=(",", ":")))
    return f"Code('{v}')"


def _object_id(v: Any) -> str:
    return f"ObjectId('{v}')"


def _binary(v: Any) -> str:
    # Plain bytes are what PyMongo decodes subtype 0 to.
    subtype = getattr(v, "subtype", 0)
    if subtype == UUID_SUBTYPE and len(v) == 16:
        try:
            uuid_hex = str(v.as_uuid(UuidRepresentation.STANDARD))
        except ValueError:
            # Not decodable as a UUID: show the raw hex instead of failing.
            uuid_hex = v.hex()
        return f"UUID('{uuid_hex}')"
    return "BinData({:x}, '{}')".format(subtype, base64.b64encode(v).decode())


def _dbref(v: Any) -> str:
    if isinstance(v.id, ObjectId):
        oid = _object_id(v.id)
    else:
        from bson_shell.stringify import to_js_string

        oid = to_js_string(v.id, 0)
    if v.database:
        return f"DBRef('{v.collection}', {oid}, '{v.database}')"
    return f"DBRef('{v.collection}', {oid})"


def _timestamp(v: Any) -> str:
    return f"Timestamp({{ t: {v.time}, i: {v.inc} }})"


def _long(v: Any) -> str:
    return f"NumberLong({int(v)})"


def _decimal128(v: Any) -> str:
    return f"NumberDecimal('{v}')"


def _double(v: Any) -> str:
    return f"Double('{float(v)!r}')"


def _int32(v: Any) -> str:
    return f"NumberInt('{int(v)}')"


def _max_key(v: Any) -> str:
    return "MaxKey()"


def _min_key(v: Any) -> str:
    return "MinKey()"


def _iso_string(dt: datetime.datetime) -> str:
    # Naive datetimes are UTC, as everywhere in PyMongo.
    if dt.tzinfo is not None:
        dt = dt.astimezone(datetime.timezone.utc)
    return "%04d-%02d-%02dT%02d:%02d:%02d.%03dZ" % (
        dt.year,
        dt.month,
        dt.day,
        dt.hour,
        dt.minute,
        dt.second,
        dt.microsecond // 1000,
    )


def _date(v: Any) -> str:
    return _iso_date(v)


def _iso_date(v: Any) -> str:
    try:
        dt = v if isinstance(v, datetime.datetime) else v.as_datetime()
        return f"ISODate('{_iso_string(dt)}')"
    except (InvalidBSON, OverflowError, ValueError):
        return f"ISODate('{int(v) if isinstance(v, DatetimeMS) else v}')"


def _regexp(v: Any) -> str:
    flags = ""
    if v.flags & re.IGNORECASE:
        flags += "i"
    if v.flags & re.MULTILINE:
        flags += "m"
    pattern = v.pattern
    if isinstance(pattern, bytes):
        pattern = pattern.decode("utf-8")
    source = json.dumps(pattern, ensure_ascii=False)
    if flags:
        return f"RegExp({source}, '{flags}')"
    return f"RegExp({source})"


def _uuid(v: Any) -> str:
    return f"UUID('{v}')"


_BSON_TO_JS_STRING: Dict[str, Callable[[Any], str]] = {
    "Code": _code,
    "ObjectId": _object_id,
    "Binary": _binary,
    "DBRef": _dbref,
    "Timestamp": _timestamp,
    "Long": _long,
    "Decimal128": _decimal128,
    "Double": _double,
    "Int32": _int32,
    "MaxKey": _max_key,
    "MinKey": _min_key,
    "Date": _date,
    "ISODate": _iso_date,
    "RegExp": _regexp,
    "BSONRegExp": _regexp,
    "UUID": _uuid,
}


def get_formatter(tag: Optional[str]) -> Optional[Callable[[Any], str]]:
    """Return the formatter registered for `tag`, or ``None``."""
    if tag is None:
        return None
    return _BSON_TO_JS_STRING.get(tag)


def format_leaf(value: Any) -> Optional[str]:
    """Render `value` as a shell literal.

    Returns ``None`` when no formatter applies, in which case the value must
    be rendered structurally.
    """
    to_js = get_formatter(get_type_descriptor(value).type)
    if to_js is None:
        return None
    return to_js(value)

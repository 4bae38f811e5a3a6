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

"""BSON numeric wrappers that :mod:`bson` leaves to plain Python numbers.

PyMongo decodes BSON int32 and double values to :class:`int` and
:class:`float`. The shell spells them ``NumberInt(...)`` and ``Double(...)``,
so parsed values keep that distinction through these subclasses. Both are
encoded by :mod:`bson` exactly like their base types.
"""
from __future__ import annotations

from typing import Any


class Int32(int):
    """Representation of the BSON int32 type.

    :Parameters:
      - `value`: the numeric value to represent
    """

    __slots__ = ()

    _type_marker = 16

    def __new__(cls, value: Any = 0) -> Int32:
        self = int.__new__(cls, value)
        if not -(2**31) <= self < 2**31:
            raise ValueError(f"{value!r} is out of range for a BSON int32")
        return self

    def __repr__(self) -> str:
        return f"Int32({int(self)})"

    def __getstate__(self) -> Any:
        return {}

    def __setstate__(self, state: Any) -> None:
        pass


class Double(float):
    """Representation of the BSON double type.

    :Parameters:
      - `value`: the numeric value to represent
    """

    __slots__ = ()

    _type_marker = 1

    def __repr__(self) -> str:
        return f"Double({float(self)!r})"

    def __getstate__(self) -> Any:
        return {}

    def __setstate__(self, state: Any) -> None:
        pass

#!/usr/bin/env python3
#
# Copyright 2020-2022 F4PGA Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""Typed integer handles for timing graph nodes, edges and clock domains."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

INVALID_INDEX = -1


@dataclass(frozen=True, order=True)
class _Handle:
    """Opaque handle wrapping a dense, zero-based integer index.

    Handles of different kinds never compare equal, so a ``NodeId`` cannot
    be mixed up with an ``EdgeId`` carrying the same index. The index
    ``-1`` is reserved for the invalid handle.

    Attributes
    ----------
    index : int
        The zero-based position of the object in its container.
    """

    index: int

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            msg = f"{type(self).__name__} index must be an int, got {self.index!r}"
            raise TypeError(msg)
        if self.index < INVALID_INDEX:
            msg = f"Invalid {type(self).__name__} index {self.index}"
            raise ValueError(msg)

    @classmethod
    def invalid(cls) -> Self:
        """Return the reserved handle that refers to nothing."""
        return cls(INVALID_INDEX)

    @property
    def is_valid(self) -> bool:
        """Whether the handle refers to an object."""
        return self.index != INVALID_INDEX

    def __index__(self) -> int:
        return self.index

    def __int__(self) -> int:
        return self.index

    def __str__(self) -> str:
        return str(self.index)


class NodeId(_Handle):
    """Handle of a timing graph node."""


class EdgeId(_Handle):
    """Handle of a timing graph edge."""


class DomainId(_Handle):
    """Handle of a clock domain."""

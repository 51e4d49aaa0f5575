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


"""Helpers for optional timing values."""

from __future__ import annotations

import math


def is_unset(value: float | None) -> bool:
    """Return True if a timing value is absent.

    Both ``None`` and the legacy NaN sentinel count as absent.

    >>> is_unset(None)
    True

    >>> is_unset(float("nan"))
    True

    >>> is_unset(0.0)
    False
    """
    return value is None or math.isnan(value)


def optional_time(value: float | None) -> float | None:
    """Normalise a timing value, mapping the NaN sentinel to None.

    >>> optional_time(float("nan")) is None
    True

    >>> optional_time(2)
    2.0
    """
    if is_unset(value):
        return None
    return float(value)


def format_float(value: float, precision: int = 6) -> str:
    """Format a float in general notation with *precision* significant digits.

    >>> format_float(2.5)
    '2.5'

    >>> format_float(1e-9)
    '1e-09'

    >>> format_float(1234567.0)
    '1.23457e+06'

    >>> format_float(3.0)
    '3'
    """
    return f"{value:.{precision}g}"

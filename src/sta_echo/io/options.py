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


"""Options controlling how echo sections are formatted."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EchoOptions:
    """Formatting switches for the echo writers.

    Attributes
    ----------
    legacy_required_gating : bool
        If True (the default), a tag's ``req:`` field is written only when
        its arrival time is set, so a tag with only a required time produces
        no line at all, and a set arrival with an unset required time writes
        ``req: nan``. The legacy dumps differ in one case: they wrote a bare
        ``type node domain`` line for a tag with only a required time. If
        False, each field is written when its own value is set.
    float_precision : int
        Significant digits used for constraint values and tag times.
    """

    legacy_required_gating: bool = True
    float_precision: int = 6

    def __post_init__(self) -> None:
        if self.float_precision < 1:
            msg = f"float_precision must be positive, got {self.float_precision}"
            raise ValueError(msg)


DEFAULT_OPTIONS = EchoOptions()

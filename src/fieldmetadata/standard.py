"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2026-10-18
Description: Standard channels, registered in the default annotation registry on import.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from typing import Any

from .meta.channels.channel import new_channel

default = new_channel("default", None)
units = new_channel("units", 1)
prior = new_channel("prior", None)
description = new_channel("description", "")
# just above zero so a log transform stays possible.
limits = new_channel("limits", (1e-7, 1.0))
bounds = new_channel("bounds", (1e-7, 1.0))
label = new_channel("label", "")
logscaled = new_channel("logscaled", False)
flattenable = new_channel("flattenable", True)
plottable = new_channel("plottable", True)
selectable = new_channel("selectable", None)


@label.set_default_factory
def _field_name_label(_: type | None, key: Any) -> Any:
    """The default label of a field is its name."""
    return key


__all__ = [
    "default",
    "units",
    "prior",
    "description",
    "limits",
    "bounds",
    "label",
    "logscaled",
    "flattenable",
    "plottable",
    "selectable",
]

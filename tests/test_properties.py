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
Description: End to end properties: generated code executed, then looked up.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect

import pytest

from fieldmetadata.channels import new_chain, new_channel
from fieldmetadata.codegen import generate


DECLARATIONS = [
    "@size\nclass T:\n    a: int\n",
    "@size\nclass T:\n    a: int | 1\n    b: int\n    c: int | _\n",
    "@size\nclass T:\n    a: int | 'x'\n    b: int | (1, 2)\n    c: int | None\n",
    "@size\nclass T:\n    pass\n",
]


# =============================================================================
# General properties
# =============================================================================


class TestLookupProperties:
    """Test the laws relating whole-type lookups, defaults and explicit values."""

    @pytest.mark.parametrize("source", DECLARATIONS)
    def test_whole_type_lookup_is_field_by_field(self, registry, execute, source):
        size = new_channel("size", 0, registry)
        klass = execute(generate(source, registry), size=size)["T"]
        names = tuple(inspect.get_annotations(klass))
        assert size(klass) == tuple(size(klass, name) for name in names)

    def test_defaults_and_explicit_values(self, registry, execute):
        size = new_channel("size", -1, registry)
        klass = execute(generate(DECLARATIONS[2], registry), size=size)["T"]
        assert size(klass) == ("x", (1, 2), None)

    def test_use_default_marker_gives_default(self, registry, execute):
        size = new_channel("size", -1, registry)
        klass = execute(generate(DECLARATIONS[1], registry), size=size)["T"]
        assert size(klass) == (1, -1, -1)

    @pytest.mark.parametrize("obj", [object(), 3, "text", None, type("Other", (), {})])
    @pytest.mark.parametrize("key", ["w", 0, None, ("w",)])
    def test_default_lookup_never_fails(self, registry, obj, key):
        size = new_channel("size", 0, registry)
        assert size.default_lookup(obj, key) == 0

    def test_chain_composition_law(self, registry, execute):
        channels = [new_channel(f"c{i}", -i, registry) for i in range(4)]
        chain = new_chain("all", channels, registry)
        klass = execute(
            generate("@all\nclass T:\n    f: int | 10 | 11\n", registry), all=chain
        )["T"]
        assert [c(klass, "f") for c in channels] == [10, 11, -2, -3]


# =============================================================================
# Scenarios
# =============================================================================


class TestScenarios:
    """Reference scenarios."""

    def test_box(self, registry, execute):
        size = new_channel("size", 0, registry)
        module = generate("@size\nclass Box:\n    w: int | 5\n    h: int\n", registry)
        box = execute(module, size=size)["Box"]

        assert size(box, "w") == 5
        assert size(box, "h") == 0
        assert size(box) == (5, 0)

    def test_geo_point(self, registry, execute):
        label = new_channel("label", "", registry)
        unit = new_channel("unit", "m", registry)
        geo = new_chain("geo", [label, unit], registry)
        module = generate("@geo\nclass Point:\n    x: float | 'X' | 'cm'\n", registry)
        point = execute(module, geo=geo)["Point"]

        assert label(point, "x") == "X"
        assert unit(point, "x") == "cm"

    def test_independent_channels_on_same_field(self, registry, execute):
        a = new_channel("a", 1, registry)
        b = new_channel("b", 2, registry)
        statements = a.build_standalone_annotation("class P:\n    z: int | 9\n")
        statements += b.build_update_annotation("class P:\n    z: int | 8\n")
        klass = execute(statements, a=a, b=b)["P"]

        assert a(klass, "z") == 9
        assert b(klass, "z") == 8

    def test_independent_channels_in_one_module(self, registry, execute):
        a = new_channel("a", 1, registry)
        b = new_channel("b", 2, registry)
        source = "@a\nclass P:\n    z: int | 9\n\n@b.update\nclass P:\n    z: int | 8\n"
        klass = execute(generate(source, registry), a=a, b=b)["P"]

        assert (a(klass, "z"), b(klass, "z")) == (9, 8)

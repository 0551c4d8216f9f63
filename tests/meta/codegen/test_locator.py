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
Description: Tests for the location of declarations, annotation decorators and retrofits.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ast

import pytest

from fieldmetadata.exceptions import NoDeclarationFound, MalformedAnnotation
from fieldmetadata.meta.channels.channel import new_channel
from fieldmetadata.meta.codegen.locator import (
    annotation_uses,
    dotted_name,
    field_name,
    import_aliases,
    iter_fields,
    locate,
    retrofit_use,
)


def statement(source: str) -> ast.stmt:
    return ast.parse(source).body[0]


# =============================================================================
# locate
# =============================================================================


class TestLocate:
    """Test locate on bare and wrapped declarations."""

    def test_bare_class(self):
        declaration = locate("class Box:\n    w: int | 5\n    h: int\n")
        assert declaration.type_name == "Box"
        assert [field_name(f) for f in declaration.fields] == ["w", "h"]

    def test_class_node(self):
        node = statement("class Box:\n    w: int\n")
        assert locate(node).node is node

    def test_class_after_other_statements(self):
        """Prior generated output in front of the class is skipped."""
        source = "import x\nsize.register(Other, 'a', 1)\n\nclass Box:\n    w: int\n"
        assert locate(source).type_name == "Box"

    def test_class_in_compound_statement(self):
        source = "if True:\n    class Box:\n        w: int\n"
        assert locate(source).type_name == "Box"

    def test_decorated_class(self):
        source = "@label\n@units\nclass Box:\n    w: int | 'w' | 'cm'\n"
        declaration = locate(source)
        assert declaration.type_name == "Box"
        assert len(declaration.node.decorator_list) == 2

    def test_first_class_wins(self):
        assert locate("class A:\n    a: int\nclass B:\n    b: int\n").type_name == "A"

    @pytest.mark.parametrize(
        "source",
        ["", "x = 1", "size.register(Box, 'w', 5)", "def f():\n    return 1\n"],
    )
    def test_no_declaration(self, source):
        with pytest.raises(NoDeclarationFound):
            locate(source)


class TestFields:
    """Test the field block of a declaration."""

    def test_only_annotated_names_are_fields(self):
        source = (
            "class Box:\n"
            "    '''doc'''\n"
            "    w: int | 5\n"
            "    x = 3\n"
            "    def area(self):\n"
            "        return 0\n"
            "    h: int = 2\n"
        )
        class_def = statement(source)
        assert [field_name(f) for f in iter_fields(class_def)] == ["w", "h"]


# =============================================================================
# Annotation decorators
# =============================================================================


class TestAnnotationUses:
    """Test the split between annotation decorators and other decorators."""

    def test_split_keeps_order(self, registry):
        new_channel("label", "", registry)
        new_channel("units", 1, registry)
        class_def = statement(
            "@dataclass\n@label\n@meta.units.update\n@other\nclass Box:\n    w: int\n"
        )
        uses, others = annotation_uses(class_def, registry, {"meta"})

        assert [u.annotation.name for u in uses] == ["label", "units"]
        assert [u.update for u in uses] == [False, True]
        assert ast.unparse(uses[1].reference) == "meta.units"
        assert [ast.unparse(d) for d in others] == ["dataclass", "other"]

    def test_unregistered_names_are_not_uses(self, registry):
        class_def = statement("@size\nclass Box:\n    w: int\n")
        uses, others = annotation_uses(class_def, registry)
        assert not uses
        assert len(others) == 1

    def test_attribute_needs_a_known_prefix(self, registry):
        """`settings.default` is an ordinary decorator unless `settings` is an alias."""
        new_channel("default", None, registry)
        class_def = statement("@settings.default\n@form.default.update\nclass Box:\n    w: int\n")

        uses, others = annotation_uses(class_def, registry)
        assert not uses
        assert [ast.unparse(d) for d in others] == ["settings.default", "form.default.update"]

        uses, _ = annotation_uses(class_def, registry, {"settings"})
        assert [ast.unparse(u.reference) for u in uses] == ["settings.default"]

    def test_dotted_alias(self, registry):
        new_channel("size", 0, registry)
        class_def = statement("@lib.meta.size\nclass Box:\n    w: int\n")
        assert not annotation_uses(class_def, registry, {"lib"})[0]
        assert annotation_uses(class_def, registry, {"lib.meta"})[0]


# =============================================================================
# Import aliases
# =============================================================================


class TestImportAliases:
    """Test the names bound by the imports of a module."""

    def test_import_forms(self):
        tree = ast.parse(
            "import shapes\nimport lib.meta\nimport pkg.tools as tools\n"
            "from models import geo, units as u\n"
        )
        assert import_aliases(tree) == {
            "shapes",
            "lib",
            "lib.meta",
            "tools",
            "geo",
            "u",
        }

    def test_nested_imports_count(self):
        tree = ast.parse("def f():\n    import shapes\n")
        assert import_aliases(tree) == {"shapes"}

    @pytest.mark.parametrize(
        ("source", "expected"),
        [("size", "size"), ("meta.size", "meta.size"), ("a.b.c", "a.b.c"), ("f().size", None)],
    )
    def test_dotted_name(self, source, expected):
        assert dotted_name(ast.parse(source, mode="eval").body) == expected


# =============================================================================
# Retrofit statements
# =============================================================================


class TestRetrofitUse:
    """Test recognition of retrofit statements."""

    def test_dict_form(self, registry):
        new_channel("size", 0, registry)
        use = retrofit_use(statement("size.retrofit(Box, {'w': 5, 'h': _})"), registry)
        assert use is not None
        assert use.annotation.name == "size"
        assert ast.unparse(use.type_ref) == "Box"
        assert [(k, ast.unparse(v)) for k, v in use.table] == [("w", "5"), ("h", "_")]

    def test_keyword_form(self, registry):
        new_channel("size", 0, registry)
        use = retrofit_use(statement("size.retrofit(models.Box, w=5 | 'cm')"), registry)
        assert use is not None
        assert ast.unparse(use.type_ref) == "models.Box"
        assert [(k, ast.unparse(v)) for k, v in use.table] == [("w", "5 | 'cm'")]

    @pytest.mark.parametrize(
        "source",
        ["x = 1", "print(1)", "other.retrofit(Box, w=1)", "size.register(Box, 'w', 1)"],
    )
    def test_not_a_retrofit(self, registry, source):
        new_channel("size", 0, registry)
        assert retrofit_use(statement(source), registry) is None

    def test_aliased_retrofit(self, registry):
        new_channel("size", 0, registry)
        source = statement("meta.size.retrofit(Box, w=1)")
        assert retrofit_use(source, registry) is None
        use = retrofit_use(source, registry, {"meta"})
        assert use is not None
        assert ast.unparse(use.reference) == "meta.size"

    @pytest.mark.parametrize(
        "source",
        [
            "size.retrofit(Box)",
            "size.retrofit()",
            "size.retrofit(Box, table)",
            "size.retrofit(Box, {1: 5})",
            "size.retrofit(Box, **table)",
        ],
    )
    def test_malformed(self, registry, source):
        new_channel("size", 0, registry)
        with pytest.raises(MalformedAnnotation):
            retrofit_use(statement(source), registry)

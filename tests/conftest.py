"""Shared fixtures: a fresh annotation registry and a runner for generated code."""

import ast
from typing import Any, Callable

import pytest

from fieldmetadata.channels import AnnotationRegistry


@pytest.fixture
def registry() -> AnnotationRegistry:
    """A registry independent from the default one."""
    return AnnotationRegistry()


def _execute(code: ast.Module | list[ast.stmt], **names: Any) -> dict[str, Any]:
    if not isinstance(code, ast.Module):
        code = ast.Module(body=list(code), type_ignores=[])
    ast.fix_missing_locations(code)
    namespace: dict[str, Any] = dict(names)
    exec(compile(code, "<generated>", "exec"), namespace)  # pylint: disable=exec-used
    return namespace


@pytest.fixture
def execute() -> Callable[..., dict[str, Any]]:
    """Run generated code with the given names in scope and return its namespace."""
    return _execute

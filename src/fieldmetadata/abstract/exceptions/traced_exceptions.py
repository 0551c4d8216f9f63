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
Description: Base exception carrying a traceback formatter and keyword context describing
             where the error was detected (type, field, channel, ...).
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"


import traceback
from typing import Any


def format_exception(e: BaseException) -> str:
    """Format the provided exception to a string with its traceback.

    Args:
        e (BaseException): The exception to format.

    Returns:
        str: The string representation of the exception with its traceback.
    """
    return "".join(traceback.format_exception(type(e), e, e.__traceback__))


def format_context(context: dict[str, Any]) -> str:
    """Format a context mapping as 'key=value' pairs, in insertion order.

    Args:
        context (dict[str, Any]): The context to format.

    Returns:
        str: The formatted context, or an empty string if there is no context.
    """
    return ", ".join(f"{k}={v!r}" for k, v in context.items())


class TracedException(Exception):
    """Base traceable exception class.

    Keyword arguments given at construction are kept as the context of the error and appended
    to its string representation.

    Examples:
        >>> e = TracedException("Something failed.", field="w")
        >>> str(e)
        "Something failed. [field='w']"
        >>> e.context
        {'field': 'w'}
    """

    def __init__(self, *args: Any, **context: Any) -> None:
        super().__init__(*args)
        self.context: dict[str, Any] = context

    def __str__(self) -> str:
        message = super().__str__()
        if not self.context:
            return message
        return f"{message} [{format_context(self.context)}]"

    def traceback_format(self) -> str:
        """Format the exception to a string with its traceback.

        Returns:
            str: The string representation of the exception with its traceback.
        """
        return format_exception(self)

# ai_context_core/exceptions.py
"""Exception hierarchy for the context core.

Contract violations (malformed messages, malformed tools, missing isolation
scope) raise one of these. Degradable failures such as a failing file search
are logged and never surface as exceptions.
"""

from __future__ import annotations


class ContextCoreError(Exception):
    """Base class for all errors raised by ai_context_core."""


class InvalidMessageShape(ContextCoreError, ValueError):
    """A message could not be decoded into a canonical message."""


class NonTextContent(ContextCoreError, TypeError):
    """Text was required but the content carries no string ``text``."""


class InvalidToolShape(ContextCoreError, ValueError):
    """A tool definition could not be decoded into a normalized tool."""


class MissingIsolationScope(ContextCoreError, ValueError):
    """A scoped component was constructed without an account scope."""

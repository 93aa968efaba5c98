"""Error taxonomy for template expansion.

Every error is an authoring-time problem (a malformed template or data that
does not match it). Nothing here is transient, so callers never retry: the
current expansion is aborted and the error propagates unchanged.
"""
from __future__ import annotations


class TemplateError(Exception):
    """Base class for all expansion failures."""


class InvalidInputType(TemplateError):
    """Wrong argument shape at the public boundary."""


class MissingAttribute(TemplateError):
    """A directive lacks a required attribute."""


class MalformedAccessor(TemplateError):
    """Unbalanced brackets/parentheses, or forbidden characters in a condition."""


class MalformedDirective(TemplateError):
    """A directive attribute has the wrong syntax, or inserts form a cycle."""


class UndefinedVariable(TemplateError):
    """A path segment is absent from the context."""


class TypeMismatch(TemplateError):
    """An accessor or directive was applied to a value of the wrong kind."""


class DuplicateVariable(TemplateError):
    """A repeat binding collides with an existing context property."""


class NotAFunction(TemplateError):
    """Call syntax was used on a value that is not callable."""


class IndexOutOfRange(TemplateError):
    """A bracket index is outside the bounds of the sequence or string."""


class InvalidPrimitiveLiteral(TemplateError):
    """A literal token is not a boolean, quoted string, or number."""


class TemplateNotFound(TemplateError):
    """An insert references an id the registry does not know."""

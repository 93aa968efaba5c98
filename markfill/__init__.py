"""markfill — fill HTML templates from data without running template code."""
from markfill.engine import Expander, evaluate_condition, expand, render, resolve_path, to_primitive
from markfill.errors import (
    DuplicateVariable,
    IndexOutOfRange,
    InvalidInputType,
    InvalidPrimitiveLiteral,
    MalformedAccessor,
    MalformedDirective,
    MissingAttribute,
    NotAFunction,
    TemplateError,
    TemplateNotFound,
    TypeMismatch,
    UndefinedVariable,
)
from markfill.markup import HtmlMarkup, TemplateRegistry, rename_table_tags

__version__ = "0.1.0"

__all__ = [
    "DuplicateVariable",
    "Expander",
    "HtmlMarkup",
    "IndexOutOfRange",
    "InvalidInputType",
    "InvalidPrimitiveLiteral",
    "MalformedAccessor",
    "MalformedDirective",
    "MissingAttribute",
    "NotAFunction",
    "TemplateError",
    "TemplateNotFound",
    "TemplateRegistry",
    "TypeMismatch",
    "UndefinedVariable",
    "evaluate_condition",
    "expand",
    "render",
    "rename_table_tags",
    "resolve_path",
    "to_primitive",
]

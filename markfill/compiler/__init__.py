from markfill.compiler.loader import (
    build_registry,
    load_config,
    load_data,
    load_template,
    parse_config_yaml,
    strip_template_definitions,
)
from markfill.compiler.validator import format_errors, validate_template

__all__ = [
    "build_registry",
    "format_errors",
    "load_config",
    "load_data",
    "load_template",
    "parse_config_yaml",
    "strip_template_definitions",
    "validate_template",
]

from markfill.engine.conditions import evaluate_condition
from markfill.engine.expander import Expander, expand, render
from markfill.engine.paths import resolve_path
from markfill.engine.primitives import stringify, to_primitive

__all__ = ["Expander", "evaluate_condition", "expand", "render", "resolve_path", "stringify", "to_primitive"]

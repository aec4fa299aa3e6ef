"""An interpreter for a small expression language that builds JSON values."""

__version__ = "0.1.0"

__all__ = [
    "ast",
    "cli",
    "context",
    "errors",
    "evaluator",
    "interpreter",
    "lexer",
    "operators",
    "parser",
    "stdlib",
    "types",
    "values",
]
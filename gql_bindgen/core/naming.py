"""Identifier conversion between GraphQL and Python naming conventions."""

import re

# Python reserved keywords that cannot be used as identifiers
PYTHON_KEYWORDS = {
    'False', 'None', 'True', 'and', 'as', 'assert', 'async', 'await',
    'break', 'class', 'continue', 'def', 'del', 'elif', 'else', 'except',
    'finally', 'for', 'from', 'global', 'if', 'import', 'in', 'is',
    'lambda', 'nonlocal', 'not', 'or', 'pass', 'raise', 'return', 'try',
    'while', 'with', 'yield'
}

# Positional parameters every generated resolver method already takes
RESOLVER_PARAMS = {'self', 'executor', 'trail'}


def snake_case(name: str) -> str:
    """Convert PascalCase, camelCase or SCREAMING_CASE to snake_case.

    Examples:
        snake_case("userName") == "user_name"
        snake_case("HTTPServer") == "http_server"
        snake_case("IN_PROGRESS") == "in_progress"
    """
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    s2 = re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1)
    words = re.split(r"[^A-Za-z0-9]+", s2)
    return "_".join(word.lower() for word in words if word)


def camel_case(name: str) -> str:
    """Convert any naming convention to UpperCamelCase."""
    return "".join(word.capitalize() for word in snake_case(name).split("_"))


def is_snake_case(name: str) -> bool:
    """Whether a name contains an underscore and is already snake_case."""
    return "_" in name and snake_case(name) == name


def safe_name(name: str) -> str:
    """Make an identifier safe for Python by suffixing keywords with underscore."""
    if name in PYTHON_KEYWORDS:
        return f"{name}_"
    return name


def safe_param_name(name: str) -> str:
    """Make an argument name safe next to the fixed resolver parameters."""
    if name in PYTHON_KEYWORDS or name in RESOLVER_PARAMS:
        return f"{name}_"
    return name

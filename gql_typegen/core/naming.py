"""Name conversions for generated definitions."""

import keyword
import re


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def pascal_case(name: str) -> str:
    """Convert snake_case or camelCase to PascalCase."""
    return "".join(word[:1].upper() + word[1:] for word in snake_case(name).split("_"))


def safe_name(name: str) -> str:
    """Make a name usable as a Python identifier by suffixing keywords with underscore."""
    if keyword.iskeyword(name):
        return f"{name}_"
    return name


def field_name(response_key: str) -> str:
    """Python attribute name for a response key or variable name.

    Leading underscores move to the end so the result is a public
    attribute: ``__typename`` becomes ``typename__``.
    """
    stripped = response_key.lstrip("_")
    name = snake_case(stripped) + "_" * (len(response_key) - len(stripped))
    return safe_name(name)

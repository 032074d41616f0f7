"""Configuration for a generation pass."""

from dataclasses import dataclass, field
from enum import Enum

from .scalars import ScalarRegistry


class DeprecationStrategy(Enum):
    """What to do when an operation selects a deprecated field."""
    ALLOW = "allow"  # generate silently
    WARN = "warn"    # generate, log a warning and mark the field
    DENY = "deny"    # fail generation


@dataclass
class CodegenOptions:
    """Options for one generation pass.

    ``response_derives`` and ``variables_derives`` are opaque strings
    attached, in order, to response-side and variables-side definitions; the
    renderer decides what they mean.
    """
    operation_name: str | None = None
    response_derives: tuple[str, ...] = ()
    variables_derives: tuple[str, ...] = ()
    scalars: ScalarRegistry = field(default_factory=ScalarRegistry)
    deprecation_strategy: DeprecationStrategy = DeprecationStrategy.WARN
    # Name of the record holding the root selection set
    response_name: str = "ResponseData"
    variables_name: str = "Variables"

"""
Validation — checks proposed invocation arguments against a ContractInterface.
"""

from scit.validation.validator import (
    DEFAULT_MAX_DEPTH,
    InvocationValidator,
    check_presence,
    validate,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "InvocationValidator",
    "check_presence",
    "validate",
]

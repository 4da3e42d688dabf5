"""
IR Enums — All labels, kinds, and codes used by the contract model.

No stringly-typed constants scattered across the extractor and validator.
"""

from enum import Enum


# ============================================================================
# Contract Model
# ============================================================================

class Visibility(str, Enum):
    """Whether a struct field is externally readable."""

    PUBLIC = "pub"
    PRIVATE = "private"


class VariantKind(str, Enum):
    """
    Shape of an enum variant.

    - DISCRIMINANT: `Name = 42`
    - PAYLOAD: `Name(A, B)`
    - UNIT: `Name`
    """

    DISCRIMINANT = "discriminant"
    PAYLOAD = "payload"
    UNIT = "unit"


class BlockKind(str, Enum):
    """Kind of declaration block recognized by the scanner."""

    METHOD = "method"
    STRUCT = "struct"
    ENUM = "enum"


# ============================================================================
# Validation
# ============================================================================

class ValidationErrorType(str, Enum):
    """Every way an invocation can fail to match the interface."""

    # Method level
    MISSING_METHOD_PARAM = "MISSING_METHOD_PARAM"
    EXTRA_METHOD_PARAM = "EXTRA_METHOD_PARAM"
    INVALID_PARAM_TYPE = "INVALID_PARAM_TYPE"

    # Struct level
    MISSING_STRUCT_FIELD = "MISSING_STRUCT_FIELD"
    EXTRA_STRUCT_FIELD = "EXTRA_STRUCT_FIELD"
    INVALID_STRUCT_TYPE = "INVALID_STRUCT_TYPE"
    STRUCT_NOT_FOUND = "STRUCT_NOT_FOUND"
    MISSING_NESTED_STRUCT = "MISSING_NESTED_STRUCT"

    # Payload boundary
    INVALID_STRUCT_VALUE = "INVALID_STRUCT_VALUE"
    STRUCT_DEPTH_EXCEEDED = "STRUCT_DEPTH_EXCEEDED"


class ValidationContext(str, Enum):
    """Which validation pass produced a violation."""

    METHOD_PARAMETERS = "method_parameters"
    STRUCT_TYPE = "struct_type"
    STRUCT_DEFINITION = "struct_definition"
    STRUCT_FIELDS = "struct_fields"
    NESTED_STRUCT = "nested_struct"


class ReportStatus(str, Enum):
    """Outcome of an engine check."""

    ACCEPTED = "accepted"              # No violations
    REJECTED = "rejected"              # One or more violations
    SKIPPED = "skipped"                # No arguments supplied, nothing checked
    UNKNOWN_METHOD = "unknown_method"  # Method not declared by the contract

"""
IR — Intermediate Representation

The IR is the single source of truth handed between the extractor,
the validator, and whoever decides whether to submit an invocation.
"""

from scit.ir.enums import (
    BlockKind,
    ReportStatus,
    ValidationContext,
    ValidationErrorType,
    VariantKind,
    Visibility,
)
from scit.ir.schema import (
    UNIT_TYPE,
    ContractEnum,
    ContractField,
    ContractInterface,
    ContractMethod,
    ContractParameter,
    ContractStruct,
    DiscriminantVariant,
    EnumVariant,
    ExtractionDiagnostic,
    InvokeArgument,
    PayloadVariant,
    UnitVariant,
    ValidationError,
    ValidationErrorDetails,
    ValidationReport,
)

__all__ = [
    # Enums
    "BlockKind",
    "ReportStatus",
    "ValidationContext",
    "ValidationErrorType",
    "VariantKind",
    "Visibility",
    # Contract model
    "UNIT_TYPE",
    "ContractEnum",
    "ContractField",
    "ContractInterface",
    "ContractMethod",
    "ContractParameter",
    "ContractStruct",
    "DiscriminantVariant",
    "EnumVariant",
    "PayloadVariant",
    "UnitVariant",
    "ExtractionDiagnostic",
    # Validation
    "InvokeArgument",
    "ValidationError",
    "ValidationErrorDetails",
    "ValidationReport",
]

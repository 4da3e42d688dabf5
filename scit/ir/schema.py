"""
IR Schema — Pydantic models for the contract interface and validation verdicts.

The IR captures the declared shape of a contract without interpreting it.
Every model is frozen: an interface is built once per parse and never mutated.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from scit.ir.enums import (
    BlockKind,
    ReportStatus,
    ValidationContext,
    ValidationErrorType,
    Visibility,
)

IR_VERSION = "0.1.0"

# Unit type token used when a method declares no return type
UNIT_TYPE = "()"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ============================================================================
# Contract Interface
# ============================================================================

class ContractParameter(_Frozen):
    """A single declared method parameter."""

    name: str = Field(..., description="Parameter name")
    type: str = Field(..., description="Declared type, kept as opaque text")


class ContractMethod(_Frozen):
    """A callable contract method."""

    name: str = Field(..., description="Method name")
    parameters: list[ContractParameter] = Field(
        default_factory=list,
        description="Parameters in declaration order (environment parameter excluded)",
    )
    return_type: str = Field(
        default=UNIT_TYPE,
        description="Declared return type; unit type when absent",
    )

    @field_validator("return_type", mode="before")
    @classmethod
    def _normalize_unit(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return UNIT_TYPE
        return value

    def parameter_names(self) -> list[str]:
        return [p.name for p in self.parameters]

    def get_parameter(self, name: str) -> Optional[ContractParameter]:
        """First parameter with this name, if any."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None


class ContractField(_Frozen):
    """A field of a contract struct."""

    name: str = Field(..., description="Field name (visibility keyword stripped)")
    type: str = Field(..., description="Declared field type")
    visibility: Visibility = Field(
        default=Visibility.PRIVATE,
        description="PUBLIC iff the declaration carried the public keyword",
    )


class ContractStruct(_Frozen):
    """A named struct exported by the contract."""

    name: str = Field(..., description="Struct name")
    fields: list[ContractField] = Field(default_factory=list)

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


# -- Enum variants: a tagged union on `kind` ---------------------------------

class DiscriminantVariant(_Frozen):
    """`Name = 42`"""

    kind: Literal["discriminant"] = "discriminant"
    name: str
    value: int = Field(..., description="Explicit discriminant")


class PayloadVariant(_Frozen):
    """`Name(A, B)`"""

    kind: Literal["payload"] = "payload"
    name: str
    data_type: str = Field(..., description="Raw payload type list")


class UnitVariant(_Frozen):
    """`Name`"""

    kind: Literal["unit"] = "unit"
    name: str


EnumVariant = Annotated[
    Union[DiscriminantVariant, PayloadVariant, UnitVariant],
    Field(discriminator="kind"),
]


class ContractEnum(_Frozen):
    """A named enum exported by the contract."""

    name: str = Field(..., description="Enum name")
    variants: list[EnumVariant] = Field(default_factory=list)
    is_error: bool = Field(
        default=False,
        description="True when the enum is marked as the contract error type",
    )

    def variant_names(self) -> list[str]:
        return [v.name for v in self.variants]


class ContractInterface(_Frozen):
    """Everything recovered from one interface description."""

    name: str = Field(..., description="Contract (trait) name")
    methods: list[ContractMethod] = Field(default_factory=list)
    structs: list[ContractStruct] = Field(default_factory=list)
    enums: list[ContractEnum] = Field(default_factory=list)

    def get_method(self, name: str) -> Optional[ContractMethod]:
        return next((m for m in self.methods if m.name == name), None)

    def get_struct(self, name: str) -> Optional[ContractStruct]:
        return next((s for s in self.structs if s.name == name), None)

    def get_enum(self, name: str) -> Optional[ContractEnum]:
        return next((e for e in self.enums if e.name == name), None)

    def error_enum(self) -> Optional[ContractEnum]:
        """The enum marked as the contract's error type, if any."""
        return next((e for e in self.enums if e.is_error), None)


# ============================================================================
# Extraction Diagnostics
# ============================================================================

class ExtractionDiagnostic(_Frozen):
    """Why a declaration block was dropped from the interface."""

    kind: BlockKind = Field(..., description="Block kind that failed to parse")
    line: int = Field(..., description="1-based line where the block started")
    reason: str = Field(..., description="Machine-readable skip reason")
    excerpt: str = Field(default="", description="First characters of the block")


# ============================================================================
# Invocation & Validation
# ============================================================================

class InvokeArgument(_Frozen):
    """
    A proposed argument for one method parameter.

    `value` is a literal for scalars and a JSON-encoded object for struct
    arguments. Non-string values are JSON-encoded on construction.
    """

    name: str = Field(..., description="Parameter name this argument targets")
    type: str = Field(..., description="Type claimed by the caller")
    value: str = Field(default="", description="Serialized argument value")

    @field_validator("value", mode="before")
    @classmethod
    def _encode_value(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (dict, list, bool, int, float)):
            return json.dumps(value)
        return value


class ValidationErrorDetails(_Frozen):
    """Structured payload of a violation."""

    context: ValidationContext = Field(..., description="Pass that produced the violation")
    param_name: Optional[str] = None
    method_name: Optional[str] = None
    struct_name: Optional[str] = None
    field_name: Optional[str] = None
    expected_type: Optional[str] = None
    provided_type: Optional[str] = None
    missing_fields: Optional[list[str]] = None
    extra_fields: Optional[list[str]] = None


class ValidationError(_Frozen):
    """One way the arguments fail to match the declared interface."""

    type: ValidationErrorType
    message: str
    details: ValidationErrorDetails


class ValidationReport(_Frozen):
    """Verdict for one proposed invocation."""

    method: str = Field(..., description="Requested method name")
    status: ReportStatus
    errors: list[ValidationError] = Field(default_factory=list)

    @computed_field
    @property
    def valid(self) -> bool:
        return self.status in (ReportStatus.ACCEPTED, ReportStatus.SKIPPED)

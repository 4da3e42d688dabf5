"""
Violation factories.

One function per ValidationErrorType so message wording and detail
payloads stay consistent wherever a violation is raised.
"""

from typing import Optional

from scit.ir.enums import ValidationContext, ValidationErrorType
from scit.ir.schema import ValidationError, ValidationErrorDetails


def make_error(
    type: ValidationErrorType,
    message: str,
    context: ValidationContext,
    **details,
) -> ValidationError:
    """Build a ValidationError with its structured detail payload."""
    return ValidationError(
        type=type,
        message=message,
        details=ValidationErrorDetails(context=context, **details),
    )


def with_context(error: ValidationError, context: ValidationContext) -> ValidationError:
    """Copy of `error` re-tagged with another context."""
    return error.model_copy(
        update={"details": error.details.model_copy(update={"context": context})}
    )


# -- Method level -------------------------------------------------------------

def missing_method_params(method_name: str, missing: list[str]) -> ValidationError:
    return make_error(
        ValidationErrorType.MISSING_METHOD_PARAM,
        f"Method {method_name} is missing required parameters: {', '.join(missing)}",
        ValidationContext.METHOD_PARAMETERS,
        method_name=method_name,
        missing_fields=missing,
    )


def extra_method_params(method_name: str, extra: list[str]) -> ValidationError:
    return make_error(
        ValidationErrorType.EXTRA_METHOD_PARAM,
        f"Method {method_name} has extra parameters: {', '.join(extra)}",
        ValidationContext.METHOD_PARAMETERS,
        method_name=method_name,
        extra_fields=extra,
    )


def invalid_param_type(
    method_name: str, param_name: str, expected: str, provided: str
) -> ValidationError:
    return make_error(
        ValidationErrorType.INVALID_PARAM_TYPE,
        f"Parameter {param_name} in method {method_name} has invalid type. "
        f"Expected {expected}, got {provided}",
        ValidationContext.METHOD_PARAMETERS,
        method_name=method_name,
        param_name=param_name,
        expected_type=expected,
        provided_type=provided,
    )


# -- Struct level -------------------------------------------------------------

def missing_struct_fields(
    struct_name: str,
    missing: list[str],
    context: ValidationContext = ValidationContext.STRUCT_FIELDS,
) -> ValidationError:
    return make_error(
        ValidationErrorType.MISSING_STRUCT_FIELD,
        f"Struct {struct_name} is missing required fields: {', '.join(missing)}",
        context,
        struct_name=struct_name,
        missing_fields=missing,
    )


def extra_struct_fields(
    struct_name: str,
    extra: list[str],
    context: ValidationContext = ValidationContext.STRUCT_FIELDS,
) -> ValidationError:
    return make_error(
        ValidationErrorType.EXTRA_STRUCT_FIELD,
        f"Struct {struct_name} has extra fields: {', '.join(extra)}",
        context,
        struct_name=struct_name,
        extra_fields=extra,
    )


def invalid_struct_type(param_name: str, expected: str, provided: str) -> ValidationError:
    return make_error(
        ValidationErrorType.INVALID_STRUCT_TYPE,
        f"Argument {param_name} has invalid struct type. Expected {expected}, got {provided}",
        ValidationContext.STRUCT_TYPE,
        param_name=param_name,
        struct_name=expected,
        expected_type=expected,
        provided_type=provided,
    )


def struct_not_found(struct_name: str) -> ValidationError:
    return make_error(
        ValidationErrorType.STRUCT_NOT_FOUND,
        f"Struct type {struct_name} not found in contract",
        ValidationContext.STRUCT_DEFINITION,
        struct_name=struct_name,
    )


def missing_nested_struct(struct_name: str, field_name: str, expected: str) -> ValidationError:
    return make_error(
        ValidationErrorType.MISSING_NESTED_STRUCT,
        f"Struct {struct_name} is missing nested struct {field_name} of type {expected}",
        ValidationContext.NESTED_STRUCT,
        struct_name=struct_name,
        field_name=field_name,
        expected_type=expected,
    )


def invalid_struct_value(
    param_name: str, struct_name: str, reason: str, field_name: Optional[str] = None
) -> ValidationError:
    return make_error(
        ValidationErrorType.INVALID_STRUCT_VALUE,
        f"Value of {param_name} is not a valid {struct_name} record: {reason}",
        ValidationContext.STRUCT_FIELDS,
        param_name=param_name,
        struct_name=struct_name,
        field_name=field_name,
        expected_type=struct_name,
    )


def struct_depth_exceeded(struct_name: str, field_name: str, max_depth: int) -> ValidationError:
    return make_error(
        ValidationErrorType.STRUCT_DEPTH_EXCEEDED,
        f"Struct {struct_name} nests {field_name} deeper than {max_depth} levels",
        ValidationContext.NESTED_STRUCT,
        struct_name=struct_name,
        field_name=field_name,
    )

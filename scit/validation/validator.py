"""
Validation Engine — checks proposed invocation arguments against an interface.

Violations are returned as data, never raised.

Passes (results concatenated in this order):
1. Presence: declared parameter names vs. provided argument names
2. Scalar types: exact string equality of declared and claimed types
3. Structs: recursive shape check of every struct-typed argument
"""

import json
from typing import Any, Iterable, Optional

from scit.core.logging import get_component_logger
from scit.ir.enums import ValidationContext
from scit.ir.schema import (
    ContractMethod,
    ContractStruct,
    InvokeArgument,
    ValidationError,
)
from scit.validation import errors as E

COMPONENT = "validate"
log = get_component_logger(COMPONENT)

DEFAULT_MAX_DEPTH = 32


def check_presence(
    context: ValidationContext,
    owner: str,
    expected: list[str],
    provided: list[str],
) -> list[ValidationError]:
    """
    Compare expected and provided names.

    Missing names aggregate into one violation, extra names into another.
    The violation types follow the context: method parameters or struct
    fields.
    """
    missing = [n for n in dict.fromkeys(expected) if n not in provided]
    extra = [n for n in dict.fromkeys(provided) if n not in expected]

    found: list[ValidationError] = []
    if context is ValidationContext.METHOD_PARAMETERS:
        if missing:
            found.append(E.missing_method_params(owner, missing))
        if extra:
            found.append(E.extra_method_params(owner, extra))
    else:
        if missing:
            found.append(E.missing_struct_fields(owner, missing, context))
        if extra:
            found.append(E.extra_struct_fields(owner, extra, context))
    return found


class InvocationValidator:
    """
    Validates arguments for methods of one contract.

    The validator only reads the struct definitions it was built with;
    each `validate` call allocates its own result list.
    """

    def __init__(self, structs: Iterable[ContractStruct], max_depth: Optional[int] = None):
        self.structs = list(structs)
        self.max_depth = max_depth or DEFAULT_MAX_DEPTH
        self._by_name: dict[str, ContractStruct] = {}
        for struct in self.structs:
            self._by_name.setdefault(struct.name, struct)

    def is_struct(self, type_name: str) -> bool:
        return type_name in self._by_name

    def validate(
        self,
        method: ContractMethod,
        args: Optional[list[InvokeArgument]],
    ) -> Optional[list[ValidationError]]:
        """
        Validate `args` for `method`.

        Returns:
            None when `args` is None (nothing to check) or when no violation
            was found; otherwise every violation, in discovery order.
        """
        if args is None:
            return None

        found: list[ValidationError] = []

        # Pass 1: presence
        found.extend(
            check_presence(
                ValidationContext.METHOD_PARAMETERS,
                method.name,
                method.parameter_names(),
                [a.name for a in args],
            )
        )

        # Pass 2: scalar types
        by_name = {}
        for arg in args:
            by_name.setdefault(arg.name, arg)
        for param in method.parameters:
            arg = by_name.get(param.name)
            if arg is not None and arg.type != param.type:
                found.append(E.invalid_param_type(method.name, param.name, param.type, arg.type))

        # Pass 3: struct shapes
        for arg in args:
            if not self.is_struct(arg.type):
                continue
            param = method.get_parameter(arg.name)
            expected = param.type if param is not None else arg.type
            found.extend(self.validate_struct_argument(arg, expected))

        log.verbose(
            "invocation_validated",
            method=method.name,
            arguments=len(args),
            violations=len(found),
        )
        return found or None

    def validate_struct_argument(
        self, arg: InvokeArgument, expected_type: str
    ) -> list[ValidationError]:
        """Check one struct-typed argument, recursing into nested structs."""
        if arg.type != expected_type:
            return [E.invalid_struct_type(arg.name, expected_type, arg.type)]

        struct = self._by_name.get(expected_type)
        if struct is None:
            return [E.struct_not_found(expected_type)]

        record, reason = _decode_record(arg.value)
        if reason is not None:
            return [E.invalid_struct_value(arg.name, struct.name, reason)]

        return self._check_record(struct, record, depth=0)

    def _check_record(
        self, struct: ContractStruct, record: dict, depth: int
    ) -> list[ValidationError]:
        found = check_presence(
            ValidationContext.STRUCT_FIELDS,
            struct.name,
            struct.field_names(),
            list(record.keys()),
        )

        for field in struct.fields:
            nested_struct = self._by_name.get(field.type)
            if nested_struct is None:
                continue

            value = record.get(field.name)
            if value is None:
                found.append(E.missing_nested_struct(struct.name, field.name, field.type))
                continue

            if depth + 1 > self.max_depth:
                log.warning(
                    "struct_depth_exceeded",
                    struct=struct.name,
                    field=field.name,
                    max_depth=self.max_depth,
                )
                found.append(E.struct_depth_exceeded(struct.name, field.name, self.max_depth))
                continue

            if not isinstance(value, dict):
                nested = [
                    E.invalid_struct_value(
                        field.name,
                        nested_struct.name,
                        f"expected an object, got {_json_type(value)}",
                        field_name=field.name,
                    )
                ]
            else:
                nested = self._check_record(nested_struct, value, depth + 1)

            found.extend(E.with_context(e, ValidationContext.NESTED_STRUCT) for e in nested)

        return found


def _decode_record(raw: str) -> tuple[dict, Optional[str]]:
    """Decode a struct payload. Empty text counts as an empty record."""
    if not raw or not raw.strip():
        return {}, None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        return {}, f"malformed JSON ({e.msg} at position {e.pos})"
    if not isinstance(value, dict):
        return {}, f"expected an object, got {_json_type(value)}"
    return value, None


def _json_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "null" if value is None else type(value).__name__


def validate(
    method: ContractMethod,
    args: Optional[list[InvokeArgument]],
    structs: Iterable[ContractStruct],
    max_depth: Optional[int] = None,
) -> Optional[list[ValidationError]]:
    """
    Validate proposed arguments for a method.

    Args:
        method: The target method
        args: Proposed arguments (None skips validation)
        structs: Struct definitions of the contract
        max_depth: Nesting bound for struct values (default 32)

    Returns:
        None if accepted or skipped, otherwise the list of violations
    """
    return InvocationValidator(structs, max_depth).validate(method, args)

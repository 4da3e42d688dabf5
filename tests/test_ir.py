"""
Tests for IR models and serialization.
"""

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from scit.ir import (
    ContractEnum,
    ContractInterface,
    ContractMethod,
    DiscriminantVariant,
    InvokeArgument,
    PayloadVariant,
    ReportStatus,
    UnitVariant,
    ValidationReport,
)
from scit.ir.serialization import (
    arguments_from_json,
    errors_to_json,
    from_json,
    load,
    report_to_json,
    save,
    to_json,
)
from scit.validation import validate


def test_method_return_type_defaults_to_unit():
    """Absent or blank return types become the unit type."""
    assert ContractMethod(name="m").return_type == "()"
    assert ContractMethod(name="m", return_type="").return_type == "()"
    assert ContractMethod(name="m", return_type=None).return_type == "()"


def test_models_are_frozen():
    """Interfaces are immutable once built."""
    method = ContractMethod(name="m")
    with pytest.raises(PydanticValidationError):
        method.name = "other"


def test_variant_union_is_discriminated_by_kind():
    """Variants round-trip through their `kind` tag."""
    enum = ContractEnum.model_validate(
        {
            "name": "E",
            "variants": [
                {"kind": "discriminant", "name": "A", "value": 1},
                {"kind": "payload", "name": "B", "data_type": "u32"},
                {"kind": "unit", "name": "C"},
            ],
        }
    )
    assert enum.variants == [
        DiscriminantVariant(name="A", value=1),
        PayloadVariant(name="B", data_type="u32"),
        UnitVariant(name="C"),
    ]


def test_invoke_argument_encodes_structured_values():
    """Dict and list values are JSON-encoded; None becomes empty."""
    assert InvokeArgument(name="a", type="Data", value={"x": 1}).value == '{"x": 1}'
    assert InvokeArgument(name="a", type="Vec<u32>", value=[1, 2]).value == "[1, 2]"
    assert InvokeArgument(name="a", type="u32", value="7").value == "7"
    assert InvokeArgument(name="a", type="u32", value=None).value == ""


def test_report_valid_flag():
    """Accepted and skipped reports are valid; the rest are not."""
    assert ValidationReport(method="m", status=ReportStatus.ACCEPTED).valid
    assert ValidationReport(method="m", status=ReportStatus.SKIPPED).valid
    assert not ValidationReport(method="m", status=ReportStatus.REJECTED).valid
    assert not ValidationReport(method="m", status=ReportStatus.UNKNOWN_METHOD).valid


def test_interface_serialization(interface):
    """ContractInterface should serialize to/from JSON."""
    json_str = to_json(interface)
    assert '"__constructor"' in json_str

    loaded = from_json(json_str)
    assert loaded == interface


def test_interface_save_and_load(interface, tmp_path):
    """ContractInterface should save to and load from disk."""
    path = tmp_path / "interface.json"
    save(interface, path)
    assert load(path) == interface


def test_errors_to_json(interface):
    """Verdicts serialize as null or a list of violations without nulls."""
    assert errors_to_json(None) == "null"

    method = interface.get_method("method_with_args")
    errors = validate(method, [InvokeArgument(name="arg1", type="u32", value="1")], [])
    payload = json.loads(errors_to_json(errors))
    assert payload == [
        {
            "type": "MISSING_METHOD_PARAM",
            "message": "Method method_with_args is missing required parameters: arg2",
            "details": {
                "context": "method_parameters",
                "method_name": "method_with_args",
                "missing_fields": ["arg2"],
            },
        }
    ]


def test_report_to_json_includes_valid():
    """The computed `valid` flag is part of the serialized report."""
    payload = json.loads(report_to_json(ValidationReport(method="m", status=ReportStatus.SKIPPED)))
    assert payload == {"method": "m", "status": "skipped", "errors": [], "valid": True}


def test_arguments_from_json():
    """Argument lists parse from JSON, encoding object values."""
    args = arguments_from_json(
        '[{"name": "arg1", "type": "u32", "value": "1"},'
        ' {"name": "arg", "type": "Data", "value": {"counter": 1}}]'
    )
    assert args[0] == InvokeArgument(name="arg1", type="u32", value="1")
    assert json.loads(args[1].value) == {"counter": 1}


def test_arguments_from_json_rejects_malformed():
    """Non-JSON argument lists are rejected."""
    with pytest.raises(PydanticValidationError):
        arguments_from_json("not json")


def test_interface_lookups():
    """Lookups return None for missing names."""
    interface = ContractInterface(
        name="C",
        methods=[ContractMethod(name="a"), ContractMethod(name="b")],
    )
    assert interface.get_method("b").name == "b"
    assert interface.get_method("missing") is None
    assert interface.get_struct("missing") is None
    assert interface.error_enum() is None

"""
IR Serialization — JSON import/export for interfaces and verdicts.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import TypeAdapter

from scit.ir.schema import ContractInterface, InvokeArgument, ValidationError, ValidationReport

_errors_adapter = TypeAdapter(list[ValidationError])
_arguments_adapter = TypeAdapter(list[InvokeArgument])


def to_json(interface: ContractInterface, indent: int = 2) -> str:
    """Serialize a ContractInterface to JSON string."""
    return interface.model_dump_json(indent=indent)


def from_json(json_str: str) -> ContractInterface:
    """Deserialize a ContractInterface from JSON string."""
    return ContractInterface.model_validate_json(json_str)


def save(interface: ContractInterface, path: Union[str, Path]) -> None:
    """Save a ContractInterface to a JSON file."""
    path = Path(path)
    path.write_text(to_json(interface))


def load(path: Union[str, Path]) -> ContractInterface:
    """Load a ContractInterface from a JSON file."""
    path = Path(path)
    return from_json(path.read_text())


def errors_to_json(errors: Optional[list[ValidationError]], indent: int = 2) -> str:
    """
    Serialize a validator verdict.

    `None` (accepted or skipped) serializes as JSON `null`.
    """
    if errors is None:
        return json.dumps(None)
    return _errors_adapter.dump_json(errors, indent=indent, exclude_none=True).decode()


def report_to_json(report: ValidationReport, indent: int = 2) -> str:
    """Serialize a ValidationReport to JSON string."""
    return report.model_dump_json(indent=indent, exclude_none=True)


def arguments_from_json(json_str: str) -> list[InvokeArgument]:
    """Parse a JSON list of `{name, type, value}` records."""
    return _arguments_adapter.validate_json(json_str)

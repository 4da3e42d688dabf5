"""
Engine — Orchestration of extraction and validation.

The engine resolves the method, runs the validator and packages the verdict.

The engine is NOT where domain logic lives.
"""

import uuid
from typing import Optional

from scit.core.logging import (
    bind_request_context,
    clear_request_context,
    get_component_logger,
)
from scit.dialect.loader import get_dialect
from scit.dialect.models import Dialect
from scit.extract.extractor import InterfaceExtractor
from scit.ir.enums import ReportStatus
from scit.ir.schema import (
    ContractInterface,
    ExtractionDiagnostic,
    InvokeArgument,
    ValidationReport,
)
from scit.validation.validator import InvocationValidator

log = get_component_logger("engine")


class Engine:
    """
    Facade over the extractor and the validator for one dialect.

    Holds no per-call state; safe to share between callers.
    """

    def __init__(self, dialect: Optional[Dialect] = None) -> None:
        self.dialect = dialect or get_dialect()
        self._extractor = InterfaceExtractor(self.dialect)

    def describe(self, source: str) -> ContractInterface:
        """Parse interface text into a ContractInterface."""
        interface, _ = self.describe_with_diagnostics(source)
        return interface

    def describe_with_diagnostics(
        self, source: str
    ) -> tuple[ContractInterface, list[ExtractionDiagnostic]]:
        """Parse interface text, also returning diagnostics for dropped blocks."""
        bind_request_context(call_id=_call_id())
        try:
            interface, diagnostics = self._extractor.extract(source)
            log.info(
                "describe_complete",
                contract=interface.name,
                methods=len(interface.methods),
                structs=len(interface.structs),
                enums=len(interface.enums),
                skipped=len(diagnostics),
            )
            return interface, diagnostics
        finally:
            clear_request_context()

    def check(
        self,
        interface: ContractInterface,
        method_name: str,
        args: Optional[list[InvokeArgument]],
    ) -> ValidationReport:
        """
        Validate a proposed invocation.

        Args:
            interface: Interface returned by `describe`
            method_name: Method the caller wants to invoke
            args: Proposed arguments (None skips validation)

        Returns:
            ValidationReport with status accepted, rejected, skipped or
            unknown_method
        """
        bind_request_context(call_id=_call_id(), method=method_name)
        try:
            report = self._check(interface, method_name, args)
            log.info(
                "check_complete",
                contract=interface.name,
                status=report.status.value,
                violations=len(report.errors),
            )
            return report
        finally:
            clear_request_context()

    def _check(
        self,
        interface: ContractInterface,
        method_name: str,
        args: Optional[list[InvokeArgument]],
    ) -> ValidationReport:
        method = interface.get_method(method_name)
        if method is None:
            return ValidationReport(method=method_name, status=ReportStatus.UNKNOWN_METHOD)

        if args is None:
            return ValidationReport(method=method_name, status=ReportStatus.SKIPPED)

        validator = InvocationValidator(interface.structs, self.dialect.max_struct_depth)
        errors = validator.validate(method, args)
        if not errors:
            return ValidationReport(method=method_name, status=ReportStatus.ACCEPTED)

        return ValidationReport(
            method=method_name,
            status=ReportStatus.REJECTED,
            errors=errors,
        )


def _call_id() -> str:
    return uuid.uuid4().hex[:12]


# Global engine instance
_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Get or create the global engine instance (configured dialect)."""
    global _engine
    if _engine is None:
        _engine = Engine()
    return _engine


def describe(source: str) -> ContractInterface:
    """
    Convenience function for parsing interface text.

    Args:
        source: Text printed by `stellar contract info interface`

    Returns:
        ContractInterface
    """
    return get_engine().describe(source)


def check(
    interface: ContractInterface,
    method_name: str,
    args: Optional[list[InvokeArgument]],
) -> ValidationReport:
    """Convenience function for validating a proposed invocation."""
    return get_engine().check(interface, method_name, args)

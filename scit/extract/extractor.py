"""
Interface Extractor — free text to ContractInterface.

Reads the Rust-flavoured interface description printed by the contract
platform's CLI and recovers the contract name, its methods, structs and
enums.

This extractor:
- Never raises on malformed text; unparsable blocks are dropped
- Records a skip reason for every dropped block (see `extract`)
- Strips the namespace prefix wherever type text is retained
- Drops the implicit environment parameter of every method
"""

import re
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from scit.core.logging import get_component_logger
from scit.dialect.loader import get_dialect
from scit.dialect.models import Dialect
from scit.extract.blocks import Block, scan_blocks
from scit.extract.splitter import split_top_level, strip_noise_lines
from scit.ir.enums import BlockKind, Visibility
from scit.ir.schema import (
    UNIT_TYPE,
    ContractEnum,
    ContractField,
    ContractInterface,
    ContractMethod,
    ContractParameter,
    ContractStruct,
    DiscriminantVariant,
    ExtractionDiagnostic,
    PayloadVariant,
    UnitVariant,
)

COMPONENT = "extract"
log = get_component_logger(COMPONENT)

# Variant carrying a tuple payload: `Transfer(Address, u64)`
VARIANT_PAYLOAD = re.compile(r"^(\w+)\s*\((.*)\)$", re.DOTALL)

T = TypeVar("T")


@dataclass
class ParseOutcome(Generic[T]):
    """Result of parsing one block: the item, or why there is none."""

    block: Block
    item: Optional[T] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.item is not None

    def diagnostic(self) -> ExtractionDiagnostic:
        excerpt = " ".join(self.block.text.split())[:80]
        return ExtractionDiagnostic(
            kind=self.block.kind,
            line=self.block.start_line,
            reason=self.reason or "unknown",
            excerpt=excerpt,
        )


class InterfaceExtractor:
    """
    Parses interface text for one dialect.

    The extractor holds only the compiled dialect patterns; every call to
    `extract` works on fresh local state.
    """

    def __init__(self, dialect: Optional[Dialect] = None):
        self.dialect = dialect or get_dialect()
        d = self.dialect
        self._method_pattern = re.compile(
            rf"{re.escape(d.function_keyword)}\s+(\w+)\s*\((.*?)\)"
            rf"(?:\s*->\s*(.*?))?\s*{re.escape(d.statement_terminator)}",
            re.DOTALL,
        )
        self._struct_pattern = _braced_pattern(d.struct_keyword, d.block_open, d.block_close)
        self._enum_pattern = _braced_pattern(d.enum_keyword, d.block_open, d.block_close)
        self._public_prefix = re.compile(rf"^{re.escape(d.public_keyword)}\s+")

    # =========================================================================
    # Entry points
    # =========================================================================

    def parse(self, source: str) -> ContractInterface:
        """Parse `source` into a ContractInterface."""
        interface, _ = self.extract(source)
        return interface

    def extract(self, source: str) -> tuple[ContractInterface, list[ExtractionDiagnostic]]:
        """
        Parse `source`, also returning a diagnostic for every dropped block.

        Raises:
            TypeError: If `source` is not a string
        """
        if not isinstance(source, str):
            raise TypeError(f"source must be str, got {type(source).__name__}")

        lines = [line.strip() for line in source.split("\n")]
        name = self.parse_contract_name(lines)

        methods: list[ContractMethod] = []
        structs: list[ContractStruct] = []
        enums: list[ContractEnum] = []
        diagnostics: list[ExtractionDiagnostic] = []

        parsers = {
            BlockKind.METHOD: (self.parse_method_block, methods),
            BlockKind.STRUCT: (self.parse_struct_block, structs),
            BlockKind.ENUM: (self.parse_enum_block, enums),
        }

        for block in scan_blocks(lines, self.dialect):
            parse_block, sink = parsers[block.kind]
            outcome = parse_block(block)
            if outcome.ok:
                sink.append(outcome.item)
                continue
            diagnostic = outcome.diagnostic()
            diagnostics.append(diagnostic)
            log.debug(
                "block_skipped",
                kind=block.kind.value,
                line=block.start_line,
                reason=diagnostic.reason,
            )

        log.verbose(
            "interface_extracted",
            contract=name,
            methods=len(methods),
            structs=len(structs),
            enums=len(enums),
            skipped=len(diagnostics),
        )

        interface = ContractInterface(
            name=name,
            methods=methods,
            structs=structs,
            enums=enums,
        )
        return interface, diagnostics

    # =========================================================================
    # Contract name
    # =========================================================================

    def parse_contract_name(self, lines: list[str]) -> str:
        """Name of the first trait declaration, or the dialect's default."""
        keyword = self.dialect.trait_keyword
        for line in lines:
            if not line.startswith(keyword):
                continue
            rest = line[len(keyword):]
            name = rest.split(self.dialect.block_open, 1)[0].strip()
            if name:
                return name
            break
        return self.dialect.default_contract_name

    # =========================================================================
    # Methods
    # =========================================================================

    def parse_method_block(self, block: Block) -> ParseOutcome[ContractMethod]:
        match = self._method_pattern.search(block.text)
        if not match:
            return ParseOutcome(block, reason="method_signature_not_matched")

        name, params_text, return_text = match.groups()
        return ParseOutcome(
            block,
            item=ContractMethod(
                name=name,
                parameters=self.parse_parameters(params_text),
                return_type=self.normalize_return_type(return_text),
            ),
        )

    def parse_parameters(self, params_text: str) -> list[ContractParameter]:
        params = []
        for item in self._split(params_text):
            name, type_ = _split_declaration(item)
            if not name or not type_:
                continue
            if type_ == self.dialect.environment_type:
                continue
            params.append(ContractParameter(name=name, type=type_))
        return params

    def normalize_return_type(self, return_text: Optional[str]) -> str:
        """
        Strip the namespace prefix and canonicalize comma spacing.

        `Result<(),Error>` and `Result<(),  Error>` both become
        `Result<(), Error>`.
        """
        if not return_text:
            return UNIT_TYPE
        cleaned = self.dialect.strip_namespace(return_text)
        segments = [s.strip() for s in cleaned.split(",")]
        return ", ".join(s for s in segments if s) or UNIT_TYPE

    # =========================================================================
    # Structs
    # =========================================================================

    def parse_struct_block(self, block: Block) -> ParseOutcome[ContractStruct]:
        match = self._struct_pattern.search(block.text)
        if not match:
            return ParseOutcome(block, reason="struct_body_not_matched")

        name, body = match.groups()
        return ParseOutcome(
            block,
            item=ContractStruct(name=name, fields=self.parse_struct_fields(body)),
        )

    def parse_struct_fields(self, body: str) -> list[ContractField]:
        fields = []
        for item in self._split(strip_noise_lines(body, self.dialect.attribute_prefix)):
            field = self.parse_field(item)
            if field is not None:
                fields.append(field)
        return fields

    def parse_field(self, text: str) -> Optional[ContractField]:
        head, type_ = _split_declaration(text)
        if not head or not type_:
            return None

        visibility = Visibility.PRIVATE
        if self._public_prefix.match(head):
            visibility = Visibility.PUBLIC
            head = self._public_prefix.sub("", head, count=1).strip()
        if not head:
            return None

        return ContractField(name=head, type=type_, visibility=visibility)

    # =========================================================================
    # Enums
    # =========================================================================

    def parse_enum_block(self, block: Block) -> ParseOutcome[ContractEnum]:
        match = self._enum_pattern.search(block.text)
        if not match:
            return ParseOutcome(block, reason="enum_body_not_matched")

        name, body = match.groups()
        return ParseOutcome(
            block,
            item=ContractEnum(
                name=name,
                variants=self.parse_variants(body),
                is_error=self.is_error_enum(block),
            ),
        )

    def parse_variants(self, body: str) -> list[Union[DiscriminantVariant, PayloadVariant, UnitVariant]]:
        variants = []
        for item in self._split(strip_noise_lines(body, self.dialect.attribute_prefix)):
            variant = self.parse_variant(item)
            if variant is not None:
                variants.append(variant)
        return variants

    def parse_variant(self, text: str) -> Optional[Union[DiscriminantVariant, PayloadVariant, UnitVariant]]:
        """
        Classify one variant, in priority order:
        `Name = 42`, then `Name(Payload)`, then bare `Name`.
        """
        if "=" in text:
            name, _, raw_value = text.partition("=")
            name = name.strip()
            try:
                value = int(raw_value.strip(), 10)
            except ValueError:
                log.debug("variant_skipped", variant=text, reason="discriminant_not_integer")
                return None
            if not name:
                return None
            return DiscriminantVariant(name=name, value=value)

        match = VARIANT_PAYLOAD.match(text)
        if match:
            name, payload = match.groups()
            return PayloadVariant(
                name=name,
                data_type=self.dialect.strip_namespace(payload).strip(),
            )

        return UnitVariant(name=text.strip())

    def is_error_enum(self, block: Block) -> bool:
        """True when the block or its attributes carry an error marker."""
        text = block.full_text
        return any(marker in text for marker in self.dialect.error_attributes)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _split(self, text: str) -> list[str]:
        return split_top_level(self.dialect.strip_namespace(text).strip())


def _braced_pattern(keyword: str, block_open: str, block_close: str) -> re.Pattern:
    return re.compile(
        rf"{re.escape(keyword)}\s+(\w+)\s*{re.escape(block_open)}"
        rf"([^{re.escape(block_close)}]*){re.escape(block_close)}",
        re.DOTALL,
    )


def _split_declaration(text: str) -> tuple[str, str]:
    """Split `name: Type` on its first colon."""
    name, sep, type_ = text.partition(":")
    if not sep:
        return name.strip(), ""
    return name.strip(), type_.strip()


# =============================================================================
# Convenience
# =============================================================================

def parse(source: str, dialect: Optional[Dialect] = None) -> ContractInterface:
    """
    Parse interface text into a ContractInterface.

    Args:
        source: Text printed by `stellar contract info interface`
        dialect: Dialect to use (default: the configured dialect)

    Returns:
        ContractInterface
    """
    return InterfaceExtractor(dialect).parse(source)


def extract(
    source: str, dialect: Optional[Dialect] = None
) -> tuple[ContractInterface, list[ExtractionDiagnostic]]:
    """Parse interface text, returning diagnostics for dropped blocks."""
    return InterfaceExtractor(dialect).extract(source)

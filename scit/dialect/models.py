"""
Dialect Models — Keywords and sentinels of one interface-description generator.
"""

from pydantic import BaseModel, ConfigDict, Field


class Dialect(BaseModel):
    """
    Everything the extractor and validator need to know about the input text.

    Defaults describe the Soroban dialect, so `Dialect()` is usable without
    touching the filesystem.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "soroban"
    version: str = "1.0"
    description: str = ""

    # Syntax
    trait_keyword: str = "pub trait"
    function_keyword: str = "fn"
    struct_keyword: str = "pub struct"
    enum_keyword: str = "pub enum"
    public_keyword: str = "pub"
    attribute_prefix: str = "#["
    statement_terminator: str = ";"
    block_open: str = "{"
    block_close: str = "}"

    # Types
    namespace_prefix: str = "soroban_sdk::"
    environment_type: str = "Env"
    default_contract_name: str = "DefaultContractName"
    error_attributes: tuple[str, ...] = (
        "#[contracterror]",
        "#[soroban_sdk::contracterror",
    )

    # Validation
    max_struct_depth: int = Field(default=32, ge=1)

    def strip_namespace(self, text: str) -> str:
        """Remove every occurrence of the namespace prefix."""
        if not self.namespace_prefix:
            return text
        return text.replace(self.namespace_prefix, "")

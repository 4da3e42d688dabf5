import pytest
from pathlib import Path

from scit.dialect import Dialect, clear_cache
from scit.extract import InterfaceExtractor
from scit.ir import ContractField, ContractStruct

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text()


@pytest.fixture(autouse=True)
def _fresh_dialect_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def dialect():
    """The built-in Soroban dialect, without touching the filesystem."""
    return Dialect()


@pytest.fixture
def extractor(dialect):
    return InterfaceExtractor(dialect)


@pytest.fixture(scope="session")
def contract_output():
    """Interface text printed for the constructor test contract."""
    return read_fixture("contract-output.txt")


@pytest.fixture
def interface(extractor, contract_output):
    return extractor.parse(contract_output)


@pytest.fixture
def data_struct():
    return ContractStruct(
        name="Data",
        fields=[
            ContractField(name="admin", type="Address", visibility="pub"),
            ContractField(name="counter", type="u32", visibility="pub"),
            ContractField(name="message", type="String", visibility="pub"),
        ],
    )


@pytest.fixture
def nested_structs():
    """`Outer { inner: Inner }` and `Inner { x: u32 }`."""
    return [
        ContractStruct(name="Outer", fields=[ContractField(name="inner", type="Inner")]),
        ContractStruct(name="Inner", fields=[ContractField(name="x", type="u32")]),
    ]

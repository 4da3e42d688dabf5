"""
Extract — Interface Extractor

Turns the text printed by `stellar contract info interface` into a
ContractInterface.
"""

from scit.extract.blocks import Block, BlockScanner, ScanState, scan_blocks
from scit.extract.extractor import InterfaceExtractor, ParseOutcome, extract, parse
from scit.extract.splitter import split_top_level

__all__ = [
    "Block",
    "BlockScanner",
    "InterfaceExtractor",
    "ParseOutcome",
    "ScanState",
    "extract",
    "parse",
    "scan_blocks",
    "split_top_level",
]

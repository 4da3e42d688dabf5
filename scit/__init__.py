"""
SCIT — Soroban Contract Interface Toolkit

Recovers a structured contract interface from the text printed by
`stellar contract info interface`, and checks proposed invocation
arguments against it before anything is sent to the network.

Parsing is pure. Validation is pure. Nothing here talks to a ledger.
"""

__version__ = "0.1.0"
__ir_version__ = "0.1.0"

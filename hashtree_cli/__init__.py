"""
hashtree CLI

Command-line demonstration of the Merkle tree.

Usage:
    python -m hashtree_cli demo
    python -m hashtree_cli root Crypto Merkle Rust Tree
    python -m hashtree_cli prove Crypto Merkle Rust Tree --index 0
    python -m hashtree_cli verify --root 0x... --index 0 --element Crypto --proof 0x... 0x...
    python -m hashtree_cli config --show
"""

__version__ = "0.1.0"

"""
CLI command modules.
"""

# Exit codes, shared by every command
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

from hashtree_cli.commands import demo, proofs  # noqa: E402

__all__ = [
    "EXIT_SUCCESS",
    "EXIT_RUNTIME_ERROR",
    "EXIT_VERIFICATION_FAILED",
    "demo",
    "proofs",
]

"""
CLI command modules.
"""

from csmt_cli.commands import tree, prove, verify

__all__ = ["tree", "prove", "verify"]

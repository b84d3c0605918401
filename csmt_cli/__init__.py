"""
CSMT CLI

Command-line interface for building trees from entry files, producing
proofs and verifying them offline.
"""

__version__ = "0.1.0"

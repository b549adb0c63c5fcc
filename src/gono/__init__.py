"""gono - terminal notes in local vaults."""

__version__ = "0.1.0"

"""Latest on-chain transaction per wallet and chain."""

__version__ = "0.1.0"

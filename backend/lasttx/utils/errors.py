"""Custom error classes."""


class LastTxError(Exception):
    """Base exception for the wallet scanner."""
    pass


class ConfigurationError(LastTxError):
    """Settings that cannot drive a scan."""
    pass


class WalletSourceError(LastTxError):
    """Error related to reading the wallet list."""
    pass


class KeyDerivationError(LastTxError):
    """A private key could not be turned into an address."""
    pass


class ReportWriteError(LastTxError):
    """Error related to saving the report workbook."""
    pass

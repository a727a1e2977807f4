"""Exception types raised by TxLens"""


class TxLensError(Exception):
    """Base class for errors reported to the user"""


class ConfigError(TxLensError):
    """Invalid or unsupported configuration value"""


class InvalidHashError(TxLensError):
    """Transaction hash is not 0x followed by 64 hex characters"""


class TransactionNotFoundError(TxLensError):
    """Node returned no transaction or no receipt for the hash"""

    def __init__(self, txhash):
        super().__init__(f"Transaction not found: {txhash}")
        self.txhash = txhash


class FetchError(TxLensError):
    """Node or explorer request failed"""

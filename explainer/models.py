"""
Data models for raw chain data and the explanations built from it.

Raw models accept both shapes a node can hand back: the integer/bytes
values produced by web3 and the hex strings returned by the explorer's
JSON-RPC proxy. Addresses are checksummed on the way in so that every
later lookup and rendering sees one spelling.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional

from eth_utils import to_checksum_address

# Transaction types
ETH_TRANSFER = 'ETH_TRANSFER'
DEX_SWAP = 'DEX_SWAP'
LENDING = 'LENDING'
STAKING = 'STAKING'
BRIDGE = 'BRIDGE'
NFT_TRANSFER = 'NFT_TRANSFER'
CONTRACT_INTERACTION = 'CONTRACT_INTERACTION'
UNKNOWN = 'UNKNOWN'

TRANSACTION_TYPES = (
    ETH_TRANSFER, DEX_SWAP, LENDING, STAKING, BRIDGE,
    NFT_TRANSFER, CONTRACT_INTERACTION, UNKNOWN,
)


def to_int(value, default=0):
    """Coerce an RPC quantity (int, hex string or decimal string) to int"""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, 'big')
    value = str(value)
    if value.lower().startswith('0x'):
        return int(value, 16) if len(value) > 2 else 0
    return int(value) if value else default


def to_hex(value):
    """Coerce RPC data (bytes/HexBytes or hex string) to a 0x-prefixed lowercase string"""
    if value is None:
        return '0x'
    if isinstance(value, (bytes, bytearray)):
        return '0x' + bytes(value).hex()
    value = str(value).lower()
    return value if value.startswith('0x') else '0x' + value


def to_address(value):
    if not value:
        return None
    return to_checksum_address(value)


@dataclass
class RawLog:
    address: str
    topics: List[str]
    data: str

    @classmethod
    def from_rpc(cls, log):
        return cls(
            address=to_address(log.get('address')),
            topics=[to_hex(topic) for topic in log.get('topics') or []],
            data=to_hex(log.get('data')),
        )


@dataclass
class RawTransaction:
    hash: str
    from_address: str
    to: Optional[str]
    value: int
    gas_price: Optional[int]
    gas_limit: int
    input: str
    nonce: int = 0
    block_number: Optional[int] = None
    max_fee_per_gas: Optional[int] = None

    @classmethod
    def from_rpc(cls, tx):
        gas_price = tx.get('gasPrice')
        max_fee = tx.get('maxFeePerGas')
        block_number = tx.get('blockNumber')
        return cls(
            hash=to_hex(tx.get('hash')),
            from_address=to_address(tx.get('from')),
            to=to_address(tx.get('to')),
            value=to_int(tx.get('value')),
            gas_price=to_int(gas_price) if gas_price is not None else None,
            gas_limit=to_int(tx.get('gas')),
            input=to_hex(tx.get('input', tx.get('data'))),
            nonce=to_int(tx.get('nonce')),
            block_number=to_int(block_number) if block_number is not None else None,
            max_fee_per_gas=to_int(max_fee) if max_fee is not None else None,
        )


@dataclass
class RawReceipt:
    status: int
    gas_used: int
    block_number: int
    logs: List[RawLog] = field(default_factory=list)
    effective_gas_price: Optional[int] = None

    @classmethod
    def from_rpc(cls, receipt):
        effective = receipt.get('effectiveGasPrice')
        return cls(
            status=to_int(receipt.get('status')),
            gas_used=to_int(receipt.get('gasUsed')),
            block_number=to_int(receipt.get('blockNumber')),
            logs=[RawLog.from_rpc(log) for log in receipt.get('logs') or []],
            effective_gas_price=to_int(effective) if effective is not None else None,
        )


@dataclass
class FunctionCall:
    function: str
    signature: str
    protocol: str
    description: str
    arguments: list = field(default_factory=list)


@dataclass
class TokenTransfer:
    from_address: str
    to: str
    amount: str
    token_address: str
    token_name: str
    token_symbol: str
    decimals: int
    description: str


@dataclass
class BalanceChange:
    account: str
    pre_balance: float
    post_balance: float
    change: float
    change_type: str
    usd_value: str
    token_type: str


@dataclass
class MEVAnalysis:
    is_mev: bool
    mev_type: str
    confidence: int
    profit: float
    description: str
    risk_level: str


@dataclass
class TransactionExplanation:
    hash: str
    success: bool
    summary: str
    timestamp: int
    block_number: int
    gas_used: int
    gas_limit: int
    gas_price: int
    gas_fee: float
    from_address: str
    to: Optional[str]
    value: int
    value_in_eth: float
    transaction_type: str
    protocol: Optional[str] = None
    function_calls: List[FunctionCall] = field(default_factory=list)
    token_transfers: List[TokenTransfer] = field(default_factory=list)
    balance_changes: List[BalanceChange] = field(default_factory=list)
    educational_content: List[str] = field(default_factory=list)
    mev_analysis: Optional[MEVAnalysis] = None
    error: Optional[str] = None

    def to_dict(self):
        """JSON-safe representation; wei quantities stay integers"""
        return asdict(self)

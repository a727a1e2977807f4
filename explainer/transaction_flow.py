"""
Transaction Flow
Linear narrative of how a transaction moved from signature to finality
"""

from collections import namedtuple

from explainer.models import ETH_TRANSFER, DEX_SWAP
from utils.formatting import format_gwei, shorten

FlowStep = namedtuple('FlowStep', ['id', 'title', 'description', 'details'])

BLOCK_TIME = '~12 seconds'

PROCESSING_NOTE = (
    "Ethereum uses proof-of-stake consensus with 12-second block times. Transactions are processed "
    "sequentially within blocks, with gas fees determining priority. The network supports smart contracts "
    "for complex DeFi operations and dApp interactions."
)

def build_flow(explanation):
    status = 'Success' if explanation.success else 'Failed'

    return [
        FlowStep(
            'initiation',
            'Transaction Initiation',
            'User initiates transaction with wallet signature',
            f"From: {shorten(explanation.from_address)}",
        ),
        FlowStep(
            'validation',
            'Network Validation',
            'Ethereum network validates transaction and checks balance',
            'Balance and nonce validation, signature verification',
        ),
        FlowStep(
            'mempool',
            'Mempool Entry',
            'Transaction enters mempool and waits for inclusion',
            f"Gas price: {format_gwei(explanation.gas_price)}",
        ),
        FlowStep(
            'execution',
            'Block Execution',
            'Validator includes transaction in block and executes',
            f"Block {explanation.block_number} • {len(explanation.function_calls)} function calls",
        ),
        FlowStep(
            'finalization',
            'Finalization',
            'Transaction is finalized and state changes are applied',
            f"Gas used: {explanation.gas_used} • Status: {status}",
        ),
    ]

def fee_rating(gas_fee):
    """Rate the fee paid, in ETH"""
    if gas_fee < 0.01:
        return 'Excellent'
    if gas_fee < 0.05:
        return 'Good'
    return 'Fair'

def calculate_gas_efficiency(gas_used, gas_limit):
    """How much of the gas limit was actually consumed"""
    if not gas_limit:
        return 'Low'
    efficiency = gas_used / gas_limit
    if efficiency > 0.9:
        return 'High'
    if efficiency > 0.7:
        return 'Medium'
    return 'Low'

def describe_outcome(explanation):
    fee = f"{explanation.gas_fee:.6f} ETH"

    if explanation.transaction_type == ETH_TRANSFER:
        return (f"This transaction transferred {explanation.value_in_eth:.4f} ETH from one address to another. "
                f"The transaction cost {fee} in gas fees, which covers network processing and validation.")
    if explanation.transaction_type == DEX_SWAP:
        return ("You executed a token swap through a decentralized exchange. This transaction involved "
                f"multiple token transfers and cost {fee} in gas fees. The swap was processed using "
                "Ethereum's smart contract system.")
    return (f"This transaction modified blockchain state and cost {fee} in gas fees. The cost covers "
            "computation and storage operations on the Ethereum network.")

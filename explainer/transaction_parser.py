"""
Transaction Parser
Turns a raw transaction + receipt pair into a TransactionExplanation
"""

import logging
import time

from eth_utils import to_checksum_address

from explainer import known_contracts
from explainer.known_contracts import TRANSFER_EVENT_SIGNATURE
from explainer.mev_detection import analyze_mev
from explainer.models import (
    BalanceChange, FunctionCall, TokenTransfer, TransactionExplanation, to_int,
    ETH_TRANSFER, DEX_SWAP, LENDING, STAKING, BRIDGE, NFT_TRANSFER,
    CONTRACT_INTERACTION, UNKNOWN,
)
from utils.formatting import format_ether, format_units, format_usd

logger = logging.getLogger('TxLens')

EMPTY_INPUT = '0x'

CATEGORY_TYPES = {
    known_contracts.DEX: DEX_SWAP,
    known_contracts.LENDING: LENDING,
    known_contracts.STAKING: STAKING,
    known_contracts.BRIDGE: BRIDGE,
}

GENERAL_EDUCATION = [
    "🚀 Ethereum is the world's leading smart contract platform, enabling decentralized applications (dApps) and DeFi protocols.",
    "⛽ Gas fees pay for transaction processing and network security. Higher gas prices can lead to faster transaction confirmation.",
]

TYPE_EDUCATION = {
    ETH_TRANSFER: [
        "💡 ETH transfers are the most basic Ethereum transactions. They move native Ether from one address to another, similar to sending money through a bank transfer.",
        "⚡ Ethereum uses a proof-of-stake consensus mechanism, making transactions faster and more energy-efficient than the previous proof-of-work system.",
    ],
    DEX_SWAP: [
        "🔄 DEX swaps use automated market makers (AMMs) to provide liquidity. Uniswap, SushiSwap, and 1inch are popular DEXs that enable token trading without intermediaries.",
        "📊 AMMs use mathematical formulas to determine prices based on the ratio of tokens in liquidity pools, ensuring continuous liquidity for traders.",
    ],
    LENDING: [
        "🏦 DeFi lending protocols like Aave and Compound allow users to earn interest on deposits or borrow against collateral without traditional banks.",
        "🔒 These protocols use over-collateralization and liquidation mechanisms to maintain system stability and protect lenders.",
    ],
    STAKING: [
        "🎯 Staking helps secure the Ethereum network while earning rewards. ETH 2.0 staking requires 32 ETH minimum, while liquid staking tokens like stETH allow smaller amounts.",
        "⚡ Liquid staking tokens provide flexibility by allowing stakers to use their staked ETH in other DeFi protocols while still earning staking rewards.",
    ],
    BRIDGE: [
        "🌉 Cross-chain bridges enable asset transfers between different blockchains, expanding the reach of Ethereum's DeFi ecosystem.",
        "🔗 Popular bridges include Arbitrum, Polygon, and Optimism, each offering different trade-offs between speed, cost, and security.",
    ],
    NFT_TRANSFER: [
        "🎨 NFTs (Non-Fungible Tokens) represent unique digital assets. The ERC-721 and ERC-1155 standards enable ownership and transfer of these unique items.",
        "🖼️ NFT transfers use the same underlying technology as token transfers but represent ownership of unique digital items rather than fungible tokens.",
    ],
}

def resolve_gas_price(tx, receipt):
    """gasPrice, then the receipt's effectiveGasPrice, then maxFeePerGas (pending type-2)"""
    for price in (tx.gas_price, receipt.effective_gas_price, tx.max_fee_per_gas):
        if price is not None:
            return price
    return 0

def parse_transaction(tx, receipt, timestamp=None, rng=None):
    """Build the full explanation for a fetched transaction"""

    success = receipt.status == 1
    gas_price = resolve_gas_price(tx, receipt)
    gas_fee = float(format_ether(receipt.gas_used * gas_price))
    value_in_eth = float(format_ether(tx.value))

    function_calls = parse_function_calls(tx)
    token_transfers = parse_token_transfers(receipt)
    transaction_type = determine_transaction_type(tx, receipt)
    summary = generate_summary(transaction_type, function_calls, token_transfers, value_in_eth)
    balance_changes = parse_balance_changes(tx, token_transfers)
    educational_content = generate_educational_content(transaction_type)
    protocol = known_contracts.get_protocol_name(tx.to) if tx.to else None

    logger.debug(f"Parsed {tx.hash}: type={transaction_type}, calls={len(function_calls)}, "
                 f"transfers={len(token_transfers)}")

    explanation = TransactionExplanation(
        hash=tx.hash,
        success=success,
        summary=summary,
        timestamp=int(timestamp if timestamp is not None else time.time()),
        block_number=receipt.block_number,
        gas_used=receipt.gas_used,
        gas_limit=tx.gas_limit,
        gas_price=gas_price,
        gas_fee=gas_fee,
        from_address=tx.from_address,
        to=tx.to,
        value=tx.value,
        value_in_eth=value_in_eth,
        transaction_type=transaction_type,
        protocol=protocol,
        function_calls=function_calls,
        token_transfers=token_transfers,
        balance_changes=balance_changes,
        educational_content=educational_content,
    )
    explanation.mev_analysis = analyze_mev(explanation, rng)
    return explanation

def has_call_data(tx):
    return bool(tx.input) and tx.input != EMPTY_INPUT

def parse_function_calls(tx):
    """One call per transaction: the selector of the outer call"""

    calls = []

    if has_call_data(tx):
        selector = tx.input[:10]
        protocol = known_contracts.get_protocol_name(tx.to)
        calls.append(FunctionCall(
            function=known_contracts.get_function_name(selector),
            signature=selector,
            protocol=protocol,
            description=generate_function_description(selector, protocol),
        ))

    return calls

def is_erc20_transfer(log):
    return bool(log.topics) and log.topics[0] == TRANSFER_EVENT_SIGNATURE and len(log.topics) == 3

def is_erc721_transfer(log):
    return bool(log.topics) and log.topics[0] == TRANSFER_EVENT_SIGNATURE and len(log.topics) == 4

def topic_to_address(topic):
    # Indexed addresses are left-padded to 32 bytes
    return to_checksum_address('0x' + topic[-40:])

def parse_token_transfers(receipt):
    transfers = []

    for log in receipt.logs:
        if not is_erc20_transfer(log):
            continue

        token = known_contracts.get_token_info(log.address)
        amount = to_int(log.data)

        transfers.append(TokenTransfer(
            from_address=topic_to_address(log.topics[1]),
            to=topic_to_address(log.topics[2]),
            amount=format_units(amount, token.decimals),
            token_address=log.address,
            token_name=token.name,
            token_symbol=token.symbol,
            decimals=token.decimals,
            description=f"{token.symbol} transfer",
        ))

    return transfers

def parse_balance_changes(tx, token_transfers):
    """Net movements implied by the value and the decoded transfers"""

    changes = []

    eth_change = float(format_ether(tx.value))
    if eth_change > 0:
        changes.append(BalanceChange(
            account=tx.to or '',
            pre_balance=0,
            post_balance=eth_change,
            change=eth_change,
            change_type='increase',
            usd_value=calculate_usd_value('ETH', eth_change),
            token_type='ETH',
        ))

    for transfer in token_transfers:
        amount = float(transfer.amount)
        usd_value = calculate_usd_value(transfer.token_symbol, amount)

        changes.append(BalanceChange(
            account=transfer.from_address,
            pre_balance=0,
            post_balance=-amount,
            change=-amount,
            change_type='decrease',
            usd_value=usd_value,
            token_type=transfer.token_symbol,
        ))
        changes.append(BalanceChange(
            account=transfer.to,
            pre_balance=0,
            post_balance=amount,
            change=amount,
            change_type='increase',
            usd_value=usd_value,
            token_type=transfer.token_symbol,
        ))

    return changes

def determine_transaction_type(tx, receipt):
    if not has_call_data(tx) and tx.value > 0:
        return ETH_TRANSFER

    if tx.to and has_call_data(tx):
        category = known_contracts.get_protocol_category(tx.to)

        if category in CATEGORY_TYPES:
            return CATEGORY_TYPES[category]

        if category == known_contracts.NFT or any(is_erc721_transfer(log) for log in receipt.logs):
            return NFT_TRANSFER

        return CONTRACT_INTERACTION

    return UNKNOWN

def generate_summary(transaction_type, function_calls, token_transfers, value_in_eth):
    if transaction_type == ETH_TRANSFER:
        return f"ETH transfer of {value_in_eth:.4f} ETH"
    elif transaction_type == DEX_SWAP:
        return f"Token swap on DEX involving {len(token_transfers)} token transfers"
    elif transaction_type == LENDING:
        return f"Lending protocol interaction with {len(function_calls)} function calls"
    elif transaction_type == STAKING:
        return "Staking transaction for ETH 2.0 or liquid staking"
    elif transaction_type == BRIDGE:
        return "Cross-chain bridge transaction"
    elif transaction_type == NFT_TRANSFER:
        return "NFT transfer transaction"
    elif transaction_type == CONTRACT_INTERACTION:
        return f"Smart contract interaction with {len(function_calls)} function calls"
    return f"Ethereum transaction with {len(function_calls)} function calls"

def generate_educational_content(transaction_type):
    return TYPE_EDUCATION.get(transaction_type, []) + GENERAL_EDUCATION

def generate_function_description(selector, protocol):
    function_name = known_contracts.get_function_name(selector)

    descriptions = {
        'transfer': f"Transfer tokens via {protocol}",
        'transferFrom': f"Transfer tokens on behalf of another address via {protocol}",
        'approve': f"Approve token spending via {protocol}",
        'swapExactETHForTokens': f"Swap exact ETH for tokens on {protocol}",
        'deposit': f"Deposit funds to {protocol}",
        'withdraw': f"Withdraw funds from {protocol}",
    }
    return descriptions.get(function_name, f"{function_name} operation on {protocol}")

def calculate_usd_value(token_symbol, amount):
    return format_usd(amount, known_contracts.get_usd_price(token_symbol))

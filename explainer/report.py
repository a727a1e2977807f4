"""
Report Module
Renders explanations, history and network stats as terminal panels
"""

import logging
from datetime import datetime, timezone

from explainer.transaction_flow import (
    BLOCK_TIME, PROCESSING_NOTE, build_flow, calculate_gas_efficiency, describe_outcome, fee_rating,
)
from utils.formatting import format_ether, format_gwei, shorten

logger = logging.getLogger('TxLens')

WIDTH = 70

MEV_ICONS = {
    'arbitrage': '🔄',
    'sandwich': '🥪',
    'liquidation': '💥',
    'frontrun': '🏃',
    'none': '✅',
}

def section(title):
    return ["", "=" * WIDTH, title, "=" * WIDTH]

def render_summary(explanation, explorer_link=None):
    status = '✓ Success' if explanation.success else '✗ Failed'
    timestamp = datetime.fromtimestamp(explanation.timestamp, tz=timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')

    lines = section("TRANSACTION SUMMARY")
    lines += [
        f"Hash: {explanation.hash}",
        f"Summary: {explanation.summary}",
        f"Type: {explanation.transaction_type}",
        f"Status: {status}",
        f"Block: {explanation.block_number} ({timestamp})",
        f"From: {explanation.from_address}",
        f"To: {explanation.to or 'Contract Creation'}",
    ]
    if explanation.protocol:
        lines.append(f"Protocol: {explanation.protocol}")
    lines += [
        f"Value: {format_ether(explanation.value)} ETH",
        f"Gas Price: {format_gwei(explanation.gas_price)}",
        f"Gas Used: {explanation.gas_used:,} of {explanation.gas_limit:,} "
        f"({calculate_gas_efficiency(explanation.gas_used, explanation.gas_limit)} efficiency)",
        f"Gas Fee: {explanation.gas_fee:.6f} ETH",
    ]
    if explorer_link:
        lines.append(f"Explorer: {explorer_link}")
    return lines

def render_details(explanation):
    lines = []

    if explanation.function_calls:
        lines += section(f"FUNCTION CALLS ({len(explanation.function_calls)})")
        for call in explanation.function_calls:
            lines.append(f"{call.function} ({call.signature}) - {call.description}")

    if explanation.token_transfers:
        lines += section(f"TOKEN TRANSFERS ({len(explanation.token_transfers)})")
        for i, transfer in enumerate(explanation.token_transfers, 1):
            lines.append(f"{i}. {transfer.amount} {transfer.token_symbol} "
                         f"{shorten(transfer.from_address)} -> {shorten(transfer.to)}")

    if explanation.balance_changes:
        lines += section("BALANCE CHANGES")
        for change in explanation.balance_changes:
            sign = '+' if change.change_type == 'increase' else ''
            lines.append(f"{shorten(change.account)}  {sign}{change.change:g} {change.token_type} ({change.usd_value})")

    return lines

def render_flow(explanation):
    lines = section("TRANSACTION FLOW")
    for i, step in enumerate(build_flow(explanation), 1):
        lines.append(f"Step {i}: {step.title}")
        lines.append(f"    {step.description}")
        lines.append(f"    {step.details}")
    lines += [
        "",
        describe_outcome(explanation),
        "",
        PROCESSING_NOTE,
        f"Block Time: {BLOCK_TIME}    Gas Efficiency: {fee_rating(explanation.gas_fee)}",
    ]
    return lines

def render_mev(analysis):
    lines = section("MEV ANALYSIS")
    if analysis is None:
        lines.append("No MEV analysis available")
        return lines

    icon = MEV_ICONS.get(analysis.mev_type, '✅')
    verdict = 'MEV activity detected' if analysis.is_mev else 'No MEV detected'
    lines += [
        f"{icon} {verdict}: {analysis.mev_type}",
        f"Confidence: {analysis.confidence}%",
        f"Risk Level: {analysis.risk_level.upper()}",
        f"Estimated Profit: ${analysis.profit:.2f}",
        f"Description: {analysis.description}",
    ]
    return lines

def render_education(explanation):
    lines = section("LEARN MORE")
    lines += explanation.educational_content
    return lines

def render_explanation(explanation, explorer_link=None):
    return (render_summary(explanation, explorer_link)
            + render_details(explanation)
            + render_flow(explanation)
            + render_mev(explanation.mev_analysis)
            + render_education(explanation))

def render_history(entries):
    if not entries:
        return ["No transactions in history yet"]

    lines = section(f"RECENT LOOKUPS ({len(entries)})")
    for i, entry in enumerate(entries, 1):
        status = '✓' if entry.get('success') else '✗'
        lines.append(f"{i}. {status} {shorten(entry['hash'])}  {entry.get('transaction_type', 'UNKNOWN'):<22}"
                     f"{entry.get('gas_fee') or 0:.6f} ETH")
    return lines

def render_recent(hashes):
    if not hashes:
        return ["No recent transactions found"]

    lines = section(f"RECENT TRANSACTIONS ({len(hashes)})")
    lines += [f"{i}. {txhash}" for i, txhash in enumerate(hashes, 1)]
    return lines

def render_network_stats(stats, network_name='Ethereum'):
    lines = section(f"{network_name.upper()} NETWORK STATUS")
    lines += [
        f"Transactions/sec: {stats.tps}",
        f"Current block: {stats.block_number:,}",
        f"Current gas: {format_gwei(stats.gas_price)}",
        f"Network difficulty: {stats.difficulty / 1e12:.2f}T",
        f"Network status: {stats.network_health}",
    ]
    return lines

def print_report(lines):
    """Emit rendered lines through the application logger"""
    for line in lines:
        logger.info(line)

"""
Transaction Analyzer Module
Fetches a transaction by hash and explains what it did
"""

import json
import logging
import random
import re

from explainer import report
from explainer.ethereum_client import (
    create_client, fetch_block_timestamp, fetch_recent_transactions, fetch_transaction_pair,
)
from explainer.history import HistoryStore, explorer_url, export_explanation
from explainer.transaction_parser import parse_transaction
from utils.errors import FetchError, InvalidHashError, TransactionNotFoundError

logger = logging.getLogger('TxLens')

TX_HASH_PATTERN = re.compile(r'^0x[a-fA-F0-9]{64}$')

NOT_FOUND_MESSAGE = 'Transaction not found or invalid hash'
DETAILS_FAILED_MESSAGE = 'Failed to load transaction details'

def validate_tx_hash(txhash):
    """Return the trimmed hash or raise InvalidHashError"""
    txhash = (txhash or '').strip()
    if not TX_HASH_PATTERN.match(txhash):
        raise InvalidHashError(f"{NOT_FOUND_MESSAGE}: {txhash or '(empty)'}")
    return txhash

def explain_transaction(client, txhash, rng=None):
    txhash = validate_tx_hash(txhash)

    tx, receipt = fetch_transaction_pair(client, txhash)
    timestamp = fetch_block_timestamp(client, receipt.block_number)
    if timestamp is None:
        logger.debug("Block timestamp unavailable, using current time")

    return parse_transaction(tx, receipt, timestamp=timestamp, rng=rng)

def make_rng(args):
    seed = getattr(args, 'seed', None)
    return random.Random(seed) if seed is not None else random.Random()

def show_explanation(explanation, args, config, history):
    """Print (or dump) one explanation and record it"""

    if getattr(args, 'json', False):
        print(json.dumps(explanation.to_dict(), indent=2, ensure_ascii=False))
    else:
        link = explorer_url(config.network, explanation.hash)
        report.print_report(report.render_explanation(explanation, link))

    if getattr(args, 'export', None):
        export_explanation(explanation, args.export)

    if history is not None and not getattr(args, 'no_history', False):
        history.add(explanation)

def explain_and_show(client, txhash, args, config, history, failure_message=NOT_FOUND_MESSAGE):
    try:
        explanation = explain_transaction(client, txhash, make_rng(args))
    except (TransactionNotFoundError, FetchError) as e:
        logger.debug(f"Lookup of {txhash} failed: {e}")
        logger.error(failure_message)
        logger.info("\n💡 Tip: Verify the transaction hash and network are correct!")
        return None

    show_explanation(explanation, args, config, history)
    return explanation

def explain_random(client, args, config, history):
    """Pick one of the newest transactions on chain and explain it"""

    hashes = fetch_recent_transactions(client, getattr(args, 'limit', 10))
    if not hashes:
        logger.error("Failed to load recent transactions")
        return None

    txhash = make_rng(args).choice(hashes)
    logger.info(f"Picked recent transaction: {txhash}")
    return explain_and_show(client, txhash, args, config, history, DETAILS_FAILED_MESSAGE)

def run_history(args, config, client_factory, history):
    if getattr(args, 'clear', False):
        history.clear()
        logger.info("History cleared")
        return None

    replay = getattr(args, 'replay', None)
    if replay is not None:
        entry = history.get(replay)
        if entry is None:
            logger.error(f"No history entry #{replay}")
            return None
        logger.info(f"Re-analyzing transaction: {entry['hash']}")
        # Replaying refreshes the data but leaves the history order alone
        return explain_and_show(client_factory(config), entry['hash'], args, config, None)

    report.print_report(report.render_history(history.load()))
    return None

def run(args, config, client_factory=create_client):
    """Main entry point for transaction analyzer"""

    logger.info("Transaction Analyzer Module")
    logger.info("-" * 50)

    history = HistoryStore(config.history_path, config.history_limit)
    module = args.module

    if module == 'history':
        return run_history(args, config, client_factory, history)

    logger.info(f"Network: {config.network} (source: {config.source})")
    client = client_factory(config)

    if module == 'explain':
        txhash = validate_tx_hash(args.txhash)
        logger.info(f"Analyzing transaction: {txhash}")
        return explain_and_show(client, txhash, args, config, history)

    if module == 'random':
        return explain_random(client, args, config, history)

    if module == 'recent':
        report.print_report(report.render_recent(fetch_recent_transactions(client, args.limit)))
        return None

    logger.error(f"Unknown command: {module}")
    return None

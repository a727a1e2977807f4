#!/usr/bin/env python3
"""
TxLens - Ethereum Transaction Explainer
Fetches a transaction by hash and explains what it did, how it flowed
through the network and whether it looks like MEV activity
"""

import sys
import argparse
import logging
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from utils.banner import print_banner
from utils.config import SOURCES, load_config
from utils.errors import TxLensError
from utils.logger import setup_logger
from explainer import network_stats, transaction_analyzer
from explainer.known_contracts import NETWORKS

__version__ = "0.1.0"

def interactive_mode(logger, config):
    """Interactive menu mode for TxLens"""

    while True:
        print("\n" + "=" * 70)
        print("              INTERACTIVE MODE - TRANSACTION EXPLAINER")
        print("=" * 70)
        print("\nWhat would you like to do?\n")
        print("  [1] Explain a transaction (by hash)")
        print("  [2] Explain a random recent transaction")
        print("  [3] Show recent lookups")
        print("  [4] Network status")
        print("  [5] Exit")
        print("\n" + "=" * 70)

        choice = input("\nEnter your choice (1-5): ").strip()

        if choice == '5':
            print("\n[*] Exiting TxLens.")
            return

        args = argparse.Namespace(seed=None, json=False, export=None, no_history=False, limit=10,
                                  clear=False, replay=None, watch=False, interval=30)

        if choice == '1':
            args.module = 'explain'
            args.txhash = input("\nEnter transaction hash (0x...): ").strip()
        elif choice == '2':
            args.module = 'random'
        elif choice == '3':
            args.module = 'history'
        elif choice == '4':
            args.module = 'stats'
        else:
            print("\n[!] Invalid choice. Please enter 1-5.")
            continue

        try:
            dispatch(args, config)
        except TxLensError as e:
            logger.error(str(e))

def dispatch(args, config):
    """Route to the module handling args.module"""

    if args.module == 'stats':
        return network_stats.run(args, config)
    return transaction_analyzer.run(args, config)

def build_parser():
    parser = argparse.ArgumentParser(
        prog='txlens',
        description='TxLens - Ethereum Transaction Explainer',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('-v', '--version', action='version', version=f'TxLens {__version__}')
    parser.add_argument('-n', '--network', choices=sorted(NETWORKS), help='Network (default: mainnet)')
    parser.add_argument('--source', choices=SOURCES, help='Fetch through an RPC node or the Etherscan proxy')
    parser.add_argument('--rpc-url', help='JSON-RPC endpoint (overrides the network default)')
    parser.add_argument('--api-key', help='Etherscan API key')
    parser.add_argument('--config', help='Path to a JSON settings file')
    parser.add_argument('--debug', action='store_true', help='Verbose console output')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')

    # Create subparsers for different modules
    subparsers = parser.add_subparsers(dest='module', help='Command to run')

    explain_parser = subparsers.add_parser('explain', help='Explain a transaction by hash')
    explain_parser.add_argument('txhash', help='Transaction hash (0x + 64 hex characters)')

    random_parser = subparsers.add_parser('random', help='Explain a random recent transaction')
    random_parser.add_argument('--limit', type=int, default=10, help='Number of recent transactions to pick from')

    for sub in (explain_parser, random_parser):
        sub.add_argument('--json', action='store_true', help='Print the explanation as JSON')
        sub.add_argument('--export', metavar='DIR', help='Also write the explanation to a JSON file in DIR')
        sub.add_argument('--no-history', action='store_true', help='Do not record this lookup')
        sub.add_argument('--seed', type=int, help='Seed for the randomized MEV figures')

    recent_parser = subparsers.add_parser('recent', help='List transactions from the newest blocks')
    recent_parser.add_argument('--limit', type=int, default=10, help='Number of hashes to list')

    history_parser = subparsers.add_parser('history', help='Show recent lookups')
    history_group = history_parser.add_mutually_exclusive_group()
    history_group.add_argument('--clear', action='store_true', help='Forget all recent lookups')
    history_group.add_argument('--replay', type=int, metavar='N', help='Re-analyze entry N of the listing')
    history_parser.add_argument('--seed', type=int, help='Seed for the randomized MEV figures')

    stats_parser = subparsers.add_parser('stats', help='Show network status')
    stats_parser.add_argument('--watch', action='store_true', help='Keep polling')
    stats_parser.add_argument('--interval', type=int, default=network_stats.DEFAULT_INTERVAL,
                              help='Seconds between polls with --watch')
    stats_parser.add_argument('--seed', type=int, help='Seed for the placeholder figures')

    return parser

def main(argv=None):
    """Main entry point for TxLens"""

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config).with_overrides(
            network=args.network,
            source=args.source,
            rpc_url=args.rpc_url,
            etherscan_api_key=args.api_key,
        )
    except TxLensError as e:
        print(f"[!] Configuration error: {e}")
        return 1

    json_output = getattr(args, 'json', False)

    # Setup logger
    logger = setup_logger(
        log_level=logging.DEBUG if args.debug else logging.INFO,
        log_dir=config.log_dir,
        use_color=not args.no_color,
        stream=sys.stderr if json_output else sys.stdout,
    )

    if not json_output:
        print_banner()

    # If no command specified, enter interactive mode
    try:
        if not args.module:
            interactive_mode(logger, config)
            return 0

        result = dispatch(args, config)
    except TxLensError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\n[!] Interrupted by user. Exiting...")
        return 0
    except EOFError:
        print("\n[*] End of input. Exiting TxLens.")
        return 0

    if args.module in ('explain', 'random') and result is None:
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(main())

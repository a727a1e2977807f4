"""
Network Stats Module
Polls the node for a small network dashboard
"""

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from explainer import report
from explainer.ethereum_client import create_client
from explainer.known_contracts import get_network
from explainer.models import to_int
from utils.errors import FetchError

logger = logging.getLogger('TxLens')

DEFAULT_INTERVAL = 30

HEALTH_LEVELS = ('excellent', 'good', 'fair')

@dataclass
class NetworkStats:
    block_number: int
    gas_price: int
    difficulty: int
    tps: int
    network_health: str

def collect_network_stats(client, rng=None):
    """Block number, gas price and latest difficulty, fetched in parallel.

    Throughput and health are placeholders: the node does not report them,
    so they are drawn at random (10-29 TPS, one of HEALTH_LEVELS).
    """
    rng = rng or random.Random()

    with ThreadPoolExecutor(max_workers=3) as executor:
        block_number_future = executor.submit(client.get_block_number)
        gas_price_future = executor.submit(client.get_gas_price)
        block_future = executor.submit(client.get_block, 'latest')
        block_number = block_number_future.result()
        gas_price = gas_price_future.result()
        block = block_future.result() or {}

    return NetworkStats(
        block_number=to_int(block_number),
        gas_price=to_int(gas_price),
        difficulty=to_int(block.get('difficulty')),
        tps=rng.randint(10, 29),
        network_health=rng.choice(HEALTH_LEVELS),
    )

def watch_network(client, on_update, interval=DEFAULT_INTERVAL, iterations=None, rng=None, sleep=time.sleep):
    """Poll until interrupted (or for `iterations` polls), handing each result to on_update"""

    completed = 0
    while iterations is None or completed < iterations:
        try:
            on_update(collect_network_stats(client, rng))
        except FetchError as e:
            logger.error(f"Failed to fetch network stats: {e}")

        completed += 1
        if iterations is None or completed < iterations:
            sleep(interval)

    return completed

def run(args, config, client_factory=create_client):
    """Main entry point for the network dashboard"""

    client = client_factory(config)
    network_name = get_network(config.network).name
    rng = random.Random(args.seed) if getattr(args, 'seed', None) is not None else None

    def show(stats):
        report.print_report(report.render_network_stats(stats, network_name))

    if getattr(args, 'watch', False):
        logger.info(f"Updating every {args.interval}s - press Ctrl+C to stop")
        return watch_network(client, show, interval=args.interval, rng=rng)

    return watch_network(client, show, iterations=1, rng=rng)

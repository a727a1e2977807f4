"""
Tests for the network dashboard.
"""
import argparse
import random

from conftest import GWEI, FakeClient
from explainer import report
from explainer.network_stats import HEALTH_LEVELS, NetworkStats, collect_network_stats, run, watch_network
from utils.errors import FetchError


def stats_client():
    return FakeClient(
        blocks={500: {'difficulty': hex(58750003716598352816469), 'timestamp': '0x1'}},
        latest=500,
        gas_price=25 * GWEI,
    )


class TestCollect:

    def test_node_figures(self):
        stats = collect_network_stats(stats_client(), random.Random(1))

        assert stats.block_number == 500
        assert stats.gas_price == 25 * GWEI
        assert stats.difficulty == 58750003716598352816469

    def test_placeholder_figures_in_range(self):
        for seed in range(20):
            stats = collect_network_stats(stats_client(), random.Random(seed))
            assert 10 <= stats.tps <= 29
            assert stats.network_health in HEALTH_LEVELS

    def test_missing_block_means_zero_difficulty(self):
        stats = collect_network_stats(FakeClient(latest=1), random.Random(0))
        assert stats.difficulty == 0

    def test_render(self):
        lines = report.render_network_stats(NetworkStats(19000000, 25 * GWEI, 0, 15, 'good'), 'Ethereum Mainnet')

        assert 'ETHEREUM MAINNET NETWORK STATUS' in lines
        assert 'Current block: 19,000,000' in lines
        assert 'Current gas: 25.00 Gwei' in lines
        assert 'Network difficulty: 0.00T' in lines


class TestWatch:

    def test_polls_and_sleeps_between(self):
        updates, sleeps = [], []

        count = watch_network(stats_client(), updates.append, interval=30, iterations=3, sleep=sleeps.append)

        assert count == 3
        assert len(updates) == 3
        assert sleeps == [30, 30]

    def test_failed_poll_is_logged_and_loop_continues(self, caplog):
        caplog.set_level('ERROR', logger='TxLens')
        updates = []

        watch_network(FakeClient(error=FetchError('node down')), updates.append, iterations=2, sleep=lambda s: None)

        assert updates == []
        assert caplog.text.count('Failed to fetch network stats') == 2

    def test_run_once(self, config, caplog):
        caplog.set_level('INFO', logger='TxLens')
        args = argparse.Namespace(module='stats', watch=False, interval=30, seed=4)

        assert run(args, config, client_factory=lambda cfg: stats_client()) == 1
        assert 'Current block: 500' in caplog.text

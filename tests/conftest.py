"""Shared fixtures: RPC-shaped transaction data and an in-memory client"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from explainer.known_contracts import TRANSFER_EVENT_SIGNATURE
from utils.config import Config

GWEI = 10 ** 9
ETHER = 10 ** 18

TX_HASH = '0x' + 'ab' * 32
OTHER_HASH = '0x' + 'cd' * 32

# Digit-only addresses are their own checksum spelling
SENDER = '0x1111111111111111111111111111111111111111'
RECEIVER = '0x2222222222222222222222222222222222222222'
POOL = '0x3333333333333333333333333333333333333333'
UNKNOWN_CONTRACT = '0x4444444444444444444444444444444444444444'

UNISWAP_V2_ROUTER = '0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D'
AAVE_V3_POOL = '0x87870Bca3F3fD6335C3F4ce8392D69350B4fA4E2'
BAYC = '0xBC4CA0EdA7647A8aB7C2061c2E118A18a936f13D'
WETH = '0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2'
USDC = '0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48'
DAI = '0x6B175474E89094C44Da98b954EedeAC495271d0F'


def topic_for(address):
    return '0x' + '0' * 24 + address[2:].lower()


def transfer_log(token, sender, receiver, amount):
    """Explorer-style ERC-20 Transfer log"""
    return {
        'address': token.lower(),
        'topics': [TRANSFER_EVENT_SIGNATURE, topic_for(sender), topic_for(receiver)],
        'data': '0x' + format(amount, '064x'),
    }


def nft_transfer_log(collection, sender, receiver, token_id):
    return {
        'address': collection.lower(),
        'topics': [TRANSFER_EVENT_SIGNATURE, topic_for(sender), topic_for(receiver), '0x' + format(token_id, '064x')],
        'data': '0x',
    }


def make_tx(to=RECEIVER, value=0, gas_price=20 * GWEI, gas=21000, data='0x', txhash=TX_HASH):
    """Explorer-style (hex string) transaction"""
    return {
        'hash': txhash,
        'from': SENDER.lower(),
        'to': to.lower() if to else None,
        'value': hex(value),
        'gasPrice': hex(gas_price),
        'gas': hex(gas),
        'input': data,
        'nonce': '0x7',
        'blockNumber': hex(19000000),
    }


def make_receipt(status=1, gas_used=21000, logs=None, block_number=19000000):
    return {
        'status': hex(status),
        'gasUsed': hex(gas_used),
        'blockNumber': hex(block_number),
        'logs': logs or [],
    }


class FakeClient:
    """In-memory stand-in for NodeClient / EtherscanClient"""

    name = 'Fake node'

    def __init__(self, transactions=None, receipts=None, blocks=None, latest=None, gas_price=30 * GWEI, error=None):
        self.transactions = transactions or {}
        self.receipts = receipts or {}
        self.blocks = blocks or {}
        self.latest = latest
        self.gas_price = gas_price
        self.error = error
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    def get_transaction(self, txhash):
        self._check('get_transaction')
        return self.transactions.get(txhash)

    def get_receipt(self, txhash):
        self._check('get_receipt')
        return self.receipts.get(txhash)

    def get_block(self, identifier='latest', full_transactions=False):
        self._check('get_block')
        if identifier == 'latest':
            identifier = self.latest
        return self.blocks.get(identifier)

    def get_block_number(self):
        self._check('get_block_number')
        return self.latest

    def get_gas_price(self):
        self._check('get_gas_price')
        return self.gas_price


@pytest.fixture
def swap_pair():
    """High-gas Uniswap swap with three token transfers"""
    tx = make_tx(
        to=UNISWAP_V2_ROUTER,
        value=1 * ETHER,
        gas_price=60 * GWEI,
        gas=250000,
        data='0x7ff36ab5' + '00' * 64,
    )
    receipt = make_receipt(gas_used=150000, logs=[
        transfer_log(WETH, UNISWAP_V2_ROUTER, POOL, 1 * ETHER),
        transfer_log(USDC, POOL, POOL, 2500 * 10 ** 6),
        transfer_log(DAI, POOL, SENDER, 2490 * ETHER),
    ])
    return tx, receipt


@pytest.fixture
def eth_transfer_pair():
    tx = make_tx(value=3 * ETHER // 2)
    receipt = make_receipt()
    return tx, receipt


@pytest.fixture
def fake_client(eth_transfer_pair):
    tx, receipt = eth_transfer_pair
    return FakeClient(
        transactions={TX_HASH: tx},
        receipts={TX_HASH: receipt},
        blocks={19000000: {'timestamp': hex(1700000000), 'difficulty': '0x0', 'transactions': []}},
        latest=19000000,
    )


@pytest.fixture
def config(tmp_path):
    return Config(home=tmp_path / 'txlens-home')

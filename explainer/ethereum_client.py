"""
Ethereum Client Module
Fetches transactions, receipts and blocks from a node endpoint.

Two backends share one small interface: NodeClient talks JSON-RPC to a node
through web3, EtherscanClient goes through the explorer's `proxy` module.
Both return plain mappings (or None when the node does not know the hash);
normalization into models happens in fetch_transaction_pair.
"""

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor

import requests
from web3 import Web3
from web3.exceptions import BlockNotFound, TransactionNotFound, Web3Exception

from explainer.known_contracts import get_network
from explainer.models import RawReceipt, RawTransaction, to_hex, to_int
from utils.errors import FetchError, TransactionNotFoundError

logger = logging.getLogger('TxLens')

ETHERSCAN_API_URL = 'https://api.etherscan.io/v2/api'

RECENT_BLOCKS = 5
HASHES_PER_BLOCK = 2

class NodeClient:
    """JSON-RPC node access through web3"""

    name = 'RPC node'

    def __init__(self, rpc_url, timeout=10, w3=None):
        self.rpc_url = rpc_url
        self.w3 = w3 or Web3(Web3.HTTPProvider(rpc_url, request_kwargs={'timeout': timeout}))

    def _call(self, description, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (TransactionNotFound, BlockNotFound):
            return None
        except (Web3Exception, requests.exceptions.RequestException, ValueError) as e:
            logger.debug(f"{description} failed against {self.rpc_url}: {e}")
            raise FetchError(f"Failed to fetch {description}: {e}") from e

    def get_transaction(self, txhash):
        tx = self._call('transaction details', self.w3.eth.get_transaction, txhash)
        return dict(tx) if tx is not None else None

    def get_receipt(self, txhash):
        receipt = self._call('transaction receipt', self.w3.eth.get_transaction_receipt, txhash)
        return dict(receipt) if receipt is not None else None

    def get_block(self, identifier='latest', full_transactions=False):
        block = self._call('block details', self.w3.eth.get_block, identifier, full_transactions)
        return dict(block) if block is not None else None

    def get_block_number(self):
        return self._call('block number', lambda: self.w3.eth.block_number)

    def get_gas_price(self):
        return self._call('gas price', lambda: self.w3.eth.gas_price)

class EtherscanClient:
    """Node access through the Etherscan JSON-RPC proxy (V2, chain-aware)"""

    name = 'Etherscan'

    def __init__(self, chain_id=1, api_key=None, timeout=10, base_url=ETHERSCAN_API_URL, session=None):
        self.chain_id = chain_id
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url
        self.session = session or requests.Session()

        if api_key:
            logger.debug(f"Using API key for {self.name}")
        else:
            logger.info("Using public endpoint (no API key) - rate limited")

    def _proxy(self, action, **params):
        params.update({
            'chainid': str(self.chain_id),
            'module': 'proxy',
            'action': action,
        })
        if self.api_key:
            params['apikey'] = self.api_key

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Network error calling {action}: {e}") from e

        if response.status_code != 200:
            raise FetchError(f"API request failed: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(f"Malformed response for {action}") from e

        if 'error' in data:
            error = data['error']
            message = error.get('message') if isinstance(error, Mapping) else error
            raise FetchError(f"{action} returned an error: {message}")

        # Explorer-level failures (bad key, rate limit) use the status/message envelope
        if data.get('status') == '0':
            raise FetchError(f"{self.name} error: {data.get('result') or data.get('message', 'Unknown')}")

        return data.get('result')

    def get_transaction(self, txhash):
        return self._proxy('eth_getTransactionByHash', txhash=txhash)

    def get_receipt(self, txhash):
        return self._proxy('eth_getTransactionReceipt', txhash=txhash)

    def get_block(self, identifier='latest', full_transactions=False):
        tag = identifier if isinstance(identifier, str) else hex(identifier)
        return self._proxy('eth_getBlockByNumber', tag=tag, boolean='true' if full_transactions else 'false')

    def get_block_number(self):
        return to_int(self._proxy('eth_blockNumber'))

    def get_gas_price(self):
        return to_int(self._proxy('eth_gasPrice'))

def create_client(config):
    """Build the client selected by configuration"""

    network = get_network(config.network)

    if config.source == 'etherscan':
        return EtherscanClient(
            chain_id=network.chain_id,
            api_key=config.etherscan_api_key,
            timeout=config.timeout,
        )

    rpc_url = config.rpc_url or network.rpc_url
    logger.debug(f"Connecting to {network.name} via {rpc_url}")
    return NodeClient(rpc_url, timeout=config.timeout)

def fetch_transaction_pair(client, txhash):
    """Fetch transaction and receipt in parallel and normalize them"""

    logger.info(f"Fetching transaction from {client.name}...")

    with ThreadPoolExecutor(max_workers=2) as executor:
        tx_future = executor.submit(client.get_transaction, txhash)
        receipt_future = executor.submit(client.get_receipt, txhash)
        tx_data = tx_future.result()
        receipt_data = receipt_future.result()

    if not tx_data or not receipt_data:
        raise TransactionNotFoundError(txhash)

    return RawTransaction.from_rpc(tx_data), RawReceipt.from_rpc(receipt_data)

def fetch_block_timestamp(client, block_number):
    """Block timestamp in seconds, or None when the block is unavailable"""

    try:
        block = client.get_block(block_number)
    except FetchError as e:
        logger.warning(f"Could not fetch block {block_number}: {e}")
        return None

    if not block or block.get('timestamp') is None:
        return None
    return to_int(block['timestamp'])

def _entry_hash(entry):
    if isinstance(entry, Mapping):
        return to_hex(entry.get('hash'))
    return to_hex(entry)

def fetch_recent_transactions(client, limit=10):
    """A handful of hashes from the newest blocks, newest block first"""

    try:
        latest_block = client.get_block_number()
        transactions = []

        for offset in range(min(limit, RECENT_BLOCKS)):
            block = client.get_block(latest_block - offset, True)
            if block and block.get('transactions'):
                entries = block['transactions'][:HASHES_PER_BLOCK]
                transactions.extend(_entry_hash(entry) for entry in entries)

        return transactions[:limit]

    except FetchError as e:
        logger.error(f"Error fetching recent transactions: {e}")
        return []

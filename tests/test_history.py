"""
Tests for the lookup history file and JSON export.
"""
import json
import random

import pytest

from conftest import OTHER_HASH, TX_HASH, make_receipt, make_tx
from explainer.history import HistoryStore, explorer_url, export_explanation
from explainer.models import RawReceipt, RawTransaction
from explainer.report import render_history
from explainer.transaction_parser import parse_transaction
from utils.errors import ConfigError


def explanation_for(txhash, value=10 ** 18):
    return parse_transaction(
        RawTransaction.from_rpc(make_tx(value=value, txhash=txhash)),
        RawReceipt.from_rpc(make_receipt()),
        timestamp=1700000000,
        rng=random.Random(0),
    )


class TestHistoryStore:

    def test_empty_when_missing(self, tmp_path):
        assert HistoryStore(tmp_path / 'history.json').load() == []

    def test_newest_first(self, tmp_path):
        store = HistoryStore(tmp_path / 'history.json')
        store.add(explanation_for(TX_HASH))
        store.add(explanation_for(OTHER_HASH))

        assert [e['hash'] for e in store.load()] == [OTHER_HASH, TX_HASH]

    def test_repeat_moves_to_front(self, tmp_path):
        store = HistoryStore(tmp_path / 'history.json')
        store.add(explanation_for(TX_HASH))
        store.add(explanation_for(OTHER_HASH))
        store.add(explanation_for(TX_HASH, value=2 * 10 ** 18))

        entries = store.load()
        assert [e['hash'] for e in entries] == [TX_HASH, OTHER_HASH]
        assert entries[0]['value'] == 2 * 10 ** 18

    def test_capped_at_limit(self, tmp_path):
        store = HistoryStore(tmp_path / 'history.json', limit=3)
        for i in range(5):
            store.add(explanation_for('0x' + f'{i:02x}' * 32))

        entries = store.load()
        assert len(entries) == 3
        assert entries[0]['hash'] == '0x' + '04' * 32

    def test_entries_are_full_explanations(self, tmp_path):
        store = HistoryStore(tmp_path / 'history.json')
        store.add(explanation_for(TX_HASH))

        entry = store.load()[0]
        assert entry['transaction_type'] == 'ETH_TRANSFER'
        assert entry['mev_analysis']['mev_type'] == 'none'
        assert entry['balance_changes'][0]['usd_value'] == '$2.00K'

    def test_corrupt_file_is_empty(self, tmp_path, caplog):
        path = tmp_path / 'history.json'
        path.write_text('{not json', encoding='utf-8')
        caplog.set_level('ERROR', logger='TxLens')

        assert HistoryStore(path).load() == []
        assert 'Failed to load history' in caplog.text

    def test_non_list_file_is_empty(self, tmp_path):
        path = tmp_path / 'history.json'
        path.write_text('{"hash": "0x1"}', encoding='utf-8')
        assert HistoryStore(path).load() == []

    def test_hand_edited_entry_without_fee_renders(self, tmp_path):
        path = tmp_path / 'history.json'
        path.write_text(json.dumps([{'hash': TX_HASH, 'gas_fee': None}]), encoding='utf-8')

        lines = render_history(HistoryStore(path).load())

        assert lines[-1].endswith('0.000000 ETH')

    def test_get_is_one_based(self, tmp_path):
        store = HistoryStore(tmp_path / 'history.json')
        store.add(explanation_for(TX_HASH))

        assert store.get(1)['hash'] == TX_HASH
        assert store.get(0) is None
        assert store.get(2) is None

    def test_clear(self, tmp_path):
        store = HistoryStore(tmp_path / 'nested' / 'history.json')
        store.add(explanation_for(TX_HASH))
        store.clear()
        store.clear()

        assert store.load() == []


class TestExport:

    def test_export_writes_pretty_json(self, tmp_path):
        path = export_explanation(explanation_for(TX_HASH), tmp_path / 'out')

        assert path.name == f'ethereum-transaction-{TX_HASH}.json'
        data = json.loads(path.read_text(encoding='utf-8'))
        assert data['hash'] == TX_HASH
        assert data['summary'] == 'ETH transfer of 1.0000 ETH'

    def test_explorer_url(self):
        assert explorer_url('mainnet', TX_HASH) == f'https://etherscan.io/tx/{TX_HASH}'
        assert explorer_url('sepolia', TX_HASH).startswith('https://sepolia.etherscan.io/tx/')

    def test_explorer_url_unknown_network(self):
        with pytest.raises(ConfigError):
            explorer_url('ropsten', TX_HASH)

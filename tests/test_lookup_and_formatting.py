"""
Tests for static lookups, RPC value normalization and number formatting.
"""
import pytest

from conftest import TX_HASH, UNISWAP_V2_ROUTER, USDC
from explainer import known_contracts
from explainer.models import RawLog, RawReceipt, RawTransaction, to_hex, to_int
from utils.errors import ConfigError
from utils.formatting import format_ether, format_gwei, format_units, format_usd, shorten


class TestKnownContracts:

    def test_lookup_ignores_case(self):
        assert known_contracts.get_protocol_name(UNISWAP_V2_ROUTER.lower()) == 'Uniswap V2 Router'
        assert known_contracts.get_protocol_category(UNISWAP_V2_ROUTER.upper().replace('0X', '0x')) == 'DEX'

    def test_unknown_protocol(self):
        assert known_contracts.get_protocol_name('0x' + '99' * 20) == 'Unknown Protocol'
        assert known_contracts.get_protocol_category(None) is None

    def test_token_info(self):
        assert known_contracts.get_token_info(USDC) == ('USD Coin', 'USDC', 6)
        assert known_contracts.get_token_info('0x' + '99' * 20) == ('Unknown Token', 'UNK', 18)

    def test_function_names(self):
        assert known_contracts.get_function_name('0xA9059CBB') == 'transfer'
        assert known_contracts.get_function_name('0x00000000') == 'unknown'

    def test_prices(self):
        assert known_contracts.get_usd_price('WBTC') == 45000
        assert known_contracts.get_usd_price('UNK') == 0

    def test_network(self):
        assert known_contracts.get_network('mainnet').chain_id == 1
        with pytest.raises(ConfigError):
            known_contracts.get_network('kovan')


class TestNormalization:

    def test_to_int(self):
        assert to_int('0x1a') == 26
        assert to_int('0x') == 0
        assert to_int('42') == 42
        assert to_int(7) == 7
        assert to_int(None) == 0
        assert to_int(b'\x01\x00') == 256

    def test_to_hex(self):
        assert to_hex(bytes.fromhex('abcd')) == '0xabcd'
        assert to_hex('0xABCD') == '0xabcd'
        assert to_hex('abcd') == '0xabcd'
        assert to_hex(None) == '0x'

    def test_web3_shaped_transaction(self):
        tx = RawTransaction.from_rpc({
            'hash': bytes.fromhex('ab' * 32),
            'from': '0x1111111111111111111111111111111111111111',
            'to': UNISWAP_V2_ROUTER.lower(),
            'value': 10 ** 18,
            'gasPrice': 30 * 10 ** 9,
            'gas': 200000,
            'input': bytes.fromhex('7ff36ab5'),
            'nonce': 3,
            'blockNumber': 100,
        })

        assert tx.hash == TX_HASH
        assert tx.to == UNISWAP_V2_ROUTER
        assert tx.input == '0x7ff36ab5'
        assert tx.gas_limit == 200000
        assert tx.block_number == 100

    def test_contract_creation_has_no_destination(self):
        tx = RawTransaction.from_rpc({'hash': TX_HASH, 'from': '0x' + '11' * 20, 'to': None, 'input': '0x60'})
        assert tx.to is None
        assert tx.block_number is None

    def test_pending_fee_fields(self):
        tx = RawTransaction.from_rpc({'hash': TX_HASH, 'from': '0x' + '11' * 20, 'maxFeePerGas': '0x10'})
        assert tx.gas_price is None
        assert tx.max_fee_per_gas == 16

    def test_receipt_logs(self):
        receipt = RawReceipt.from_rpc({
            'status': 1,
            'gasUsed': '0x5208',
            'blockNumber': '0x10',
            'effectiveGasPrice': '0x3b9aca00',
            'logs': [{'address': USDC.lower(), 'topics': [bytes(32)], 'data': b''}],
        })

        assert receipt.gas_used == 21000
        assert receipt.effective_gas_price == 10 ** 9
        assert receipt.logs == [RawLog(USDC, ['0x' + '00' * 32], '0x')]


class TestFormatting:

    @pytest.mark.parametrize('value,decimals,expected', [
        (10 ** 18, 18, '1.0'),
        (1500000, 6, '1.5'),
        (0, 18, '0.0'),
        (123, 0, '123.0'),
        (-5 * 10 ** 17, 18, '-0.5'),
        (1, 18, '0.000000000000000001'),
    ])
    def test_format_units(self, value, decimals, expected):
        assert format_units(value, decimals) == expected

    def test_format_ether_and_gwei(self):
        assert format_ether(25 * 10 ** 17) == '2.5'
        assert format_gwei(1234567890) == '1.23 Gwei'

    @pytest.mark.parametrize('amount,price,expected', [
        (0.004, 1, '< $0.01'),
        (0.5, 1, '$0.500'),
        (12.5, 1, '$12.50'),
        (1.5, 1000, '$1.50K'),
        (5, 0, '< $0.01'),
    ])
    def test_format_usd(self, amount, price, expected):
        assert format_usd(amount, price) == expected

    def test_shorten(self):
        assert shorten(TX_HASH) == '0xababab...abababab'
        assert shorten('0x1234') == '0x1234'
        assert shorten(None) == 'N/A'

"""
Known Contracts
Static lookup tables used to classify transactions: networks, protocol
contracts, tokens, function selectors and reference USD prices.
"""

from collections import namedtuple

from utils.errors import ConfigError

Network = namedtuple('Network', ['name', 'rpc_url', 'chain_id', 'block_explorer'])
Protocol = namedtuple('Protocol', ['name', 'category'])
TokenInfo = namedtuple('TokenInfo', ['name', 'symbol', 'decimals'])

UNKNOWN_PROTOCOL = 'Unknown Protocol'
UNKNOWN_TOKEN = TokenInfo('Unknown Token', 'UNK', 18)

# keccak256("Transfer(address,address,uint256)")
TRANSFER_EVENT_SIGNATURE = '0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef'

NETWORKS = {
    'mainnet': Network('Ethereum Mainnet', 'https://eth.llamarpc.com', 1, 'https://etherscan.io'),
    'sepolia': Network('Sepolia Testnet', 'https://ethereum-sepolia-rpc.publicnode.com', 11155111,
                       'https://sepolia.etherscan.io'),
}

# Protocol categories
DEX = 'DEX'
LENDING = 'LENDING'
STAKING = 'STAKING'
BRIDGE = 'BRIDGE'
NFT = 'NFT'
TOKEN = 'TOKEN'

KNOWN_CONTRACTS = {
    # DEXs
    '0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D': Protocol('Uniswap V2 Router', DEX),
    '0xE592427A0AEce92De3Edee1F18E0157C05861564': Protocol('Uniswap V3 Router', DEX),
    '0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45': Protocol('Uniswap V3 Router 2', DEX),
    '0x3fC91A3afd70395Cd496C647d5a6CC9D4B2b7FAD': Protocol('Uniswap Universal Router', DEX),
    '0xd9e1cE17f2641f24aE83637ab66a2cca9C378B9F': Protocol('SushiSwap Router', DEX),
    '0x1b02dA8Cb0d097eB8D57A175b88c7D8b47997506': Protocol('SushiSwap Router V2', DEX),
    '0x1111111254fb6c44bAC0beD2854e76F90643097d': Protocol('1inch Router V4', DEX),
    '0x1111111254EEB25477B68fb85Ed929f73A960582': Protocol('1inch Router V5', DEX),

    # Lending
    '0x7d2768dE32b0b80b7a3454c06BdAc94A69DDc7A9': Protocol('Aave V2 Lending Pool', LENDING),
    '0x87870Bca3F3fD6335C3F4ce8392D69350B4fA4E2': Protocol('Aave V3 Lending Pool', LENDING),
    '0x4Ddc2D193948926D02f9B1fE9e1daa0718270ED5': Protocol('Compound cETH', LENDING),
    '0x39AA39c021dfbaE8faC545936693aC917d5E7563': Protocol('Compound cUSDC', LENDING),
    '0xf650C3d88D12dB855b8bf7D11Be6C55A4e07dCC9': Protocol('Compound cUSDT', LENDING),
    '0x5d3a536E4D6DbD6114cc1Ead35777bAB948E3643': Protocol('Compound cDAI', LENDING),

    # Staking
    '0x00000000219ab540356cBB839Cbe05303d7705Fa': Protocol('Ethereum 2.0 Deposit Contract', STAKING),
    '0xae7ab96520DE3A18E5e111B5EaAb095312D7fE84': Protocol('Lido stETH', STAKING),
    '0xBe9895146f7AF43049ca1c1AE358B0541Ea49704': Protocol('Coinbase cbETH', STAKING),
    '0xae78736Cd615f374D3085123A210448E74Fc6393': Protocol('Rocket Pool rETH', STAKING),

    # NFTs
    '0xBC4CA0EdA7647A8aB7C2061c2E118A18a936f13D': Protocol('Bored Ape Yacht Club', NFT),
    '0x60E4d786628Fea6478F785A6d7e704777c86a7c6': Protocol('Mutant Ape Yacht Club', NFT),
    '0xED5AF388653567Af2F388E6224dC7C4b3241C544': Protocol('Azuki', NFT),
    '0x49cF6f5d44E70224e2E23fDcdd2C053F30aDA28B': Protocol('CloneX', NFT),

    # Bridges
    '0x3ee18B2214AFF97000D97cf826a7A8C3F3d415F0': Protocol('Wormhole Bridge', BRIDGE),
    '0x4Dbd4fc535Ac27206064B68FfCf827b0A60BAB3d': Protocol('Arbitrum Bridge', BRIDGE),
    '0xA0c68C638235ee32657e8f720a23ceC1bFc77C77': Protocol('Polygon Bridge', BRIDGE),

    # Tokens
    '0x6B175474E89094C44Da98b954EedeAC495271d0F': Protocol('DAI Stablecoin', TOKEN),
    '0x9f8F72aA9304c8B593d555F12eF6589cC3A579A2': Protocol('MakerDAO MKR', TOKEN),
    '0x514910771AF9Ca656af840dff83E8264EcF986CA': Protocol('Chainlink LINK', TOKEN),
    '0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599': Protocol('Wrapped Bitcoin (WBTC)', TOKEN),
    '0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48': Protocol('USD Coin (USDC)', TOKEN),
    '0xdAC17F958D2ee523a2206206994597C13D831ec7': Protocol('Tether USD (USDT)', TOKEN),
    '0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2': Protocol('Wrapped Ether (WETH)', TOKEN),
}

KNOWN_TOKENS = {
    '0x0000000000000000000000000000000000000000': TokenInfo('Ethereum', 'ETH', 18),
    '0x6B175474E89094C44Da98b954EedeAC495271d0F': TokenInfo('Dai Stablecoin', 'DAI', 18),
    '0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48': TokenInfo('USD Coin', 'USDC', 6),
    '0xdAC17F958D2ee523a2206206994597C13D831ec7': TokenInfo('Tether USD', 'USDT', 6),
    '0x514910771AF9Ca656af840dff83E8264EcF986CA': TokenInfo('Chainlink', 'LINK', 18),
    '0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599': TokenInfo('Wrapped Bitcoin', 'WBTC', 8),
    '0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984': TokenInfo('Uniswap', 'UNI', 18),
    '0x7D1AfA7B718fb893dB30A3aBc0Cfc608AaCfeBB0': TokenInfo('Polygon', 'MATIC', 18),
    '0xae7ab96520DE3A18E5e111B5EaAb095312D7fE84': TokenInfo('Lido Staked ETH', 'stETH', 18),
    '0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2': TokenInfo('Wrapped Ether', 'WETH', 18),
    '0xae78736Cd615f374D3085123A210448E74Fc6393': TokenInfo('Rocket Pool ETH', 'rETH', 18),
    '0xBe9895146f7AF43049ca1c1AE358B0541Ea49704': TokenInfo('Coinbase Wrapped Staked ETH', 'cbETH', 18),
}

FUNCTION_SELECTORS = {
    '0xa9059cbb': 'transfer',
    '0x23b872dd': 'transferFrom',
    '0x095ea7b3': 'approve',
    '0x7ff36ab5': 'swapExactETHForTokens',
    '0x18cbafe5': 'swapExactTokensForETH',
    '0x38ed1739': 'swapExactTokensForTokens',
    '0x5c11d795': 'swapExactTokensForTokensSupportingFeeOnTransferTokens',
    '0xd0e30db0': 'deposit',
    '0x2e1a7d4d': 'withdraw',
    '0x1249c58b': 'mint',
    '0x42966c68': 'burn',
}

# Reference prices, not live quotes
USD_PRICES = {
    'ETH': 2000,
    'WETH': 2000,
    'stETH': 2000,
    'rETH': 2000,
    'cbETH': 2000,
    'DAI': 1.00,
    'USDC': 1.00,
    'USDT': 1.00,
    'LINK': 15.00,
    'WBTC': 45000,
    'UNI': 8.00,
    'MATIC': 0.80,
}

_CONTRACTS_BY_ADDRESS = {address.lower(): protocol for address, protocol in KNOWN_CONTRACTS.items()}
_TOKENS_BY_ADDRESS = {address.lower(): token for address, token in KNOWN_TOKENS.items()}


def get_protocol(address):
    if not address:
        return None
    return _CONTRACTS_BY_ADDRESS.get(address.lower())


def get_protocol_name(address):
    protocol = get_protocol(address)
    return protocol.name if protocol else UNKNOWN_PROTOCOL


def get_protocol_category(address):
    protocol = get_protocol(address)
    return protocol.category if protocol else None


def get_token_info(token_address):
    if not token_address:
        return UNKNOWN_TOKEN
    return _TOKENS_BY_ADDRESS.get(token_address.lower(), UNKNOWN_TOKEN)


def get_function_name(selector):
    return FUNCTION_SELECTORS.get(selector.lower(), 'unknown')


def get_usd_price(symbol):
    return USD_PRICES.get(symbol, 0)


def get_network(name):
    try:
        return NETWORKS[name]
    except KeyError:
        raise ConfigError(f"Unsupported network: {name} (expected one of {', '.join(NETWORKS)})") from None

"""
MEV Detection
Heuristic MEV-likelihood scoring for an explained transaction.

The score is a fixed decision table over gas price, transaction type and
transfer count. Reported profit figures are drawn at random inside a
per-type range; they are illustrative only and carry no information about
the transaction. Pass a seeded random.Random for reproducible output.
"""

import random

from explainer.models import MEVAnalysis, DEX_SWAP, LENDING

HIGH_GAS_WEI = 50 * 10 ** 9
VERY_HIGH_GAS_WEI = 100 * 10 ** 9

# mev_type -> (confidence, profit floor, profit spread, risk level, description)
MEV_PROFILES = {
    'arbitrage': (85, 50, 200, 'medium', 'Detected potential arbitrage opportunity across multiple DEXs'),
    'sandwich': (70, 20, 100, 'high', 'High gas fee suggests potential sandwich attack'),
    'liquidation': (95, 100, 500, 'low', 'Liquidation transaction with potential MEV profit'),
    'frontrun': (60, 10, 50, 'high', 'High gas price suggests potential frontrunning activity'),
}

NO_MEV = MEVAnalysis(
    is_mev=False,
    mev_type='none',
    confidence=90,
    profit=0,
    description='No MEV activity detected - normal transaction',
    risk_level='low',
)

def classify_mev(explanation):
    """Return the MEV type the heuristics point at, or 'none'"""

    is_high_gas = explanation.gas_price > HIGH_GAS_WEI
    is_dex_interaction = explanation.transaction_type == DEX_SWAP
    has_multiple_transfers = len(explanation.token_transfers) > 2
    is_contract_interaction = len(explanation.function_calls) > 0

    if is_dex_interaction and has_multiple_transfers and is_high_gas:
        return 'arbitrage'
    if explanation.gas_price > VERY_HIGH_GAS_WEI:
        return 'sandwich'
    if explanation.transaction_type == LENDING and is_high_gas:
        return 'liquidation'
    if is_high_gas and is_contract_interaction:
        return 'frontrun'
    return 'none'

def analyze_mev(explanation, rng=None):
    rng = rng or random.Random()

    mev_type = classify_mev(explanation)
    if mev_type == 'none':
        return MEVAnalysis(**vars(NO_MEV))

    confidence, floor, spread, risk_level, description = MEV_PROFILES[mev_type]
    return MEVAnalysis(
        is_mev=True,
        mev_type=mev_type,
        confidence=confidence,
        profit=rng.random() * spread + floor,
        description=description,
        risk_level=risk_level,
    )

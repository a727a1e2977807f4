"""Number and string formatting helpers"""

WEI_PER_GWEI = 10 ** 9


def format_units(value, decimals=18):
    """Format an integer token amount as a decimal string.

    Trailing zeros of the fraction are dropped but at least one fractional
    digit is kept, so 10**18 with 18 decimals renders as "1.0".
    """
    sign = '-' if value < 0 else ''
    whole, fraction = divmod(abs(int(value)), 10 ** decimals)
    fraction_str = str(fraction).rjust(decimals, '0').rstrip('0') if decimals else ''
    return f"{sign}{whole}.{fraction_str or '0'}"


def format_ether(wei):
    return format_units(wei, 18)


def wei_to_gwei(wei):
    return int(wei) / WEI_PER_GWEI


def format_gwei(wei):
    return f"{wei_to_gwei(wei):.2f} Gwei"


def format_usd(amount, price):
    """Render amount * price the way the summary panels show it"""

    usd_value = amount * price

    if usd_value < 0.01:
        return '< $0.01'
    elif usd_value < 1:
        return f"${usd_value:.3f}"
    elif usd_value < 1000:
        return f"${usd_value:.2f}"
    else:
        return f"${usd_value / 1000:.2f}K"


def shorten(value, head=8, tail=8):
    """Abbreviate a long hex string: 0x123456...9abcdef0"""
    if not value:
        return 'N/A'
    if len(value) <= head + tail:
        return value
    return f"{value[:head]}...{value[-tail:]}"

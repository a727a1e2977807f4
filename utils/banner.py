"""Startup banner for TxLens"""

BANNER = r"""
  _____      _
 |_   _|_  _| |    ___ _ __  ___
   | | \ \/ / |   / _ \ '_ \/ __|
   | |  >  <| |__|  __/ | | \__ \
   |_| /_/\_\_____\___|_| |_|___/

   Ethereum Transaction Explainer
"""

def print_banner():
    """Print the TxLens banner"""
    print(BANNER)
    print("=" * 70)

"""Transaction explanation modules for TxLens"""

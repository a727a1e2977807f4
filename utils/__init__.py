"""Utilities package for TxLens"""
from .logger import setup_logger
from .banner import print_banner
from .config import Config, load_config

__all__ = ['setup_logger', 'print_banner', 'Config', 'load_config']

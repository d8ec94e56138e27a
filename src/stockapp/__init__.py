"""
stockapp

Stock quote backend: user accounts, market data queries and the NSE updater.
"""
__version__ = "0.1.0"

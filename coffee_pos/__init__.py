"""
Coffee POS - orders, menu and one-time customer links for a coffee delivery business
"""
__version__ = "1.0.0"

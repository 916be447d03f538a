"""
DeFi Tracker backend package.
"""

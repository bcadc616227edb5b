"""
Configuration package for the Order Miner.
"""

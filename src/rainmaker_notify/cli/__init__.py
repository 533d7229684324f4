"""
Operational CLI for the local notification store.
"""

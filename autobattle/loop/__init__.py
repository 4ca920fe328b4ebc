"""
Battle loops: chained battles with all-or-nothing rewards.
"""

"""
autobattle package.

The combat core of an auto-battling role-playing game: attack resolution,
attack cooldowns, procedural enemy generation and chained battle loops with
all-or-nothing rewards.
"""

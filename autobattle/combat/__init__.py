"""
Combat module for the combat core.

Attack formulas, cooldown scheduling, single-attack resolution and the
tick-driven battle loop.
"""

"""
Character module for the combat core.

Core attributes and derived stats, the combatant contract, the player with
its inventory, and procedurally generated enemies.
"""

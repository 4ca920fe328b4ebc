"""
Core module for the combat core.

Shared constants, logging, error handling, validation, settings, content
loading and console utilities.
"""

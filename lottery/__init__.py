"""
Single-shot lottery simulation: a human player and a crowd of computer players buy tickets,
one draw picks winners across three prize tiers, and revenue is split between prizes and the house.
"""

__version__ = "1.0.0"

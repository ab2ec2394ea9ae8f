"""
microchess

Periodic random chess game generator with a size-bounded durable log and
seed-based replay verification.
"""

__version__ = "0.1.0"

"""
microchess CLI - random chess game generator

Commands:
- microchess run - Generate games periodically into the game log
- microchess upload - Upload the game log periodically
- microchess replay - List, replay and verify stored games
- microchess version - Show version information
"""

__version__ = "0.1.0"

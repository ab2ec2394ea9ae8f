"""
Test suite for microchess.

Focus areas:
- Stream determinism (bit-exact mulberry32)
- Generator determinism and result classification
- Bounded store trim/persist guarantees
- Replay selection, path safety and comparison
- Scheduler overlap guard and drain
"""

"""
Congklak - Seed-sowing board game rules engine

A deterministic rules engine for the two-player Congklak (Mancala) variant.
The engine takes a board and a chosen pit and provides:
- Sowing with opponent-store skipping
- Chained relays ("sow again")
- Captures ("shooting")
- Extra-turn / pass-turn / game-over resolution
"""

__version__ = "0.1.0"

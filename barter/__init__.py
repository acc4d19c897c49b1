"""
Barter - Bartering Economy Board Game Simulator

A deterministic engine for simulating a turn-based bartering game in order
to tune its design parameters (victory threshold, starting cash, deck
composition). Provides:
- Game state and seeded setup
- The turn/round state machine with its trade protocol
- Pluggable player strategies
- Streaming statistics over many simulated runs
"""

__version__ = "0.1.0"

"""DRep Score engine: deterministic 0-100 reputation scores for Cardano governance delegates."""

__version__ = "3.0.0"

"""Fixed-rate swap quote negotiation with centralized exchanges."""

__version__ = "0.1.0"

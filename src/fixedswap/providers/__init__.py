"""Swap provider plugins.

Providers:
- Exolix: centralized fixed-rate exchange
"""

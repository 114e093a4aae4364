"""Tools for Cadence contract projects: programs, imports, deployment order, addresses and network queries."""

__version__ = "1.0.0"
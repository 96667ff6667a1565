"""Stochastic simulation of paper-wasp nest construction on a hexagonal lattice."""

__version__ = "0.1.0"
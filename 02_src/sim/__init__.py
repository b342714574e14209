"""Synthetic live feed."""

from .sim import ISim, Sim

__all__ = ["ISim", "Sim"]

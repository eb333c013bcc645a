"""Simulation backends for tiny-qsim."""

from tiny_qsim.backends.statevector import execute

__all__ = ["execute"]

"""Provably fair Plinko: commit-reveal seeds, deterministic ball drops, round API."""

__version__ = "0.1.0"

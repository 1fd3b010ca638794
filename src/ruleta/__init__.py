"""Ruleta - a prize wheel with an eased spin and a fixed top pointer."""

__version__ = "0.1.0"

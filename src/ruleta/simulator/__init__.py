"""Pygame desktop simulator."""

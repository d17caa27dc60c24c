"""Taste profile construction from a holder's owned assets."""

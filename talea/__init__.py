"""Talea travel discovery app."""

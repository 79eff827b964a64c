"""Visualization layer.

This module projects occurrences onto the globe and streams them,
with background shape layers, to the viewer sink.
"""

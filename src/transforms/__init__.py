"""Row-level occurrence transforms.

This module holds the pure date, transpose, filtering, and projection
steps shared by ingestion and visualization.
"""

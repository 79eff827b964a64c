"""Occurrence file ingestion.

This module reads delimited GBIF exports into typed columns and
turns them into filtered occurrence batches.
"""

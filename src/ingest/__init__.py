"""Roster ingestion pipeline.

This package reads roster spreadsheets and normalizes their rows.
It partitions each upload by unit and hands drafts to the store layer.
"""

"""Roster analytics layer.

This module turns normalized employee records into breakdowns,
salary statistics, trends, and quality annotations for snapshots.
"""

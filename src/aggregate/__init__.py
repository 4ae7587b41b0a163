"""Purchase aggregation.

This package folds parsed records into aggregates, merges partial
aggregates, and answers highest-entry queries.
"""

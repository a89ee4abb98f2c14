"""Core reconciliation logic: models, lookup helpers and services."""

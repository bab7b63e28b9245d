"""Reconciliation agent: configuration loading, engine and main loop."""

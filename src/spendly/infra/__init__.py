"""Persistence plumbing for the Spendly store."""

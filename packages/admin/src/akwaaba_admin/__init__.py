"""Operator maintenance CLI for Akwaaba Homes."""

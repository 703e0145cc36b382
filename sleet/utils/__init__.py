"""Helpers for errors, logging and data center resolution."""

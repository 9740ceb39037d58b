"""Handins Grade Checker: log in to handins and compute your current weighted grade."""

__version__ = "0.1.0"

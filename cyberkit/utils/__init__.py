"""Shared helpers for CyberKit."""

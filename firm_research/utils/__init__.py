"""Shared utilities for firm_research."""

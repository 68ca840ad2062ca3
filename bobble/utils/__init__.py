"""Shared utilities for Bobble."""

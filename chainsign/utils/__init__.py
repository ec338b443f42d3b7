"""Utility helpers for chainsign."""

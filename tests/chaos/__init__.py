"""Chaos testing module for failure scenario validation.

Tests client behavior under failure conditions including flaky backends,
malformed payloads and damaged local storage.
"""

"""
Unit tests for rowstore.
"""

"""
Test fixtures package.
"""

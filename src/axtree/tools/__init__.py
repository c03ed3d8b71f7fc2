"""
Tools for reading and normalizing accessibility trees.
"""

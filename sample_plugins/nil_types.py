"""
Plugin declaring a Types table that was never filled in.
"""

Types = None

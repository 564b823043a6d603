"""
Plugin exporting neither Command nor Types.
"""

VERSION = "0.0.0"

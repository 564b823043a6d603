"""
Plugin exporting an unannotated Command.
"""


def Command(d):
    """Print a dog's name to stdout."""
    print(d.name())

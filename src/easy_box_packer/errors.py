"""Exceptions raised by the packer's public functions."""


class InvalidInput(ValueError):
    """Malformed input: empty item list, non-positive extents, negative weights..."""

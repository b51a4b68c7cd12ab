"""Root of the structfilter exception hierarchy."""


class StructFilterError(Exception):
    """Any failure raised by derivation, rules or conversion.

    Catch this to handle every structfilter error at once; the subclasses
    say which stage failed.
    """

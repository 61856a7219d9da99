"""Exceptions raised by choicegen.

Every error is raised at the point of the offending call, before any
generator state is touched.
"""


class ChoiceGenError(Exception):
    """Base class for all choicegen errors"""


class InvalidArgument(ChoiceGenError, ValueError):
    """Malformed n, k, worker count or other scalar argument"""


class InvalidCombination(ChoiceGenError, ValueError):
    """A tuple that is not a strictly increasing k-subset of range(n)"""


class OutOfRange(ChoiceGenError, IndexError):
    """A rank outside [0, C(n, k))"""


class GeneratorStateError(ChoiceGenError, RuntimeError):
    """start() or seek_to() called on a generator that already started"""

"""
Exceptions raised by cornerkit.

Both precondition failures below signal a programming error in the
caller.  They are never retried or recovered from inside the package.
"""


class CornerKitError(Exception):
    """Base class for all cornerkit errors."""


class ImageTooSmallError(CornerKitError, ValueError):
    """Image width or height does not exceed twice the kernel radius."""


class CornerListOverflowError(CornerKitError, IndexError):
    """More candidates were appended than the list can hold."""

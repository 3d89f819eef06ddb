"""Custom exceptions for the ORM test doubles.

The doubles themselves never raise: configured failures travel through the
first argument of the completion callback. The exceptions here belong to
the helpers test code uses around the doubles.
"""


class CallbackNotInvokedError(AssertionError):
    """A completion callback was not invoked in time.

    Raised by ``CallbackCapture.wait()`` when the awaited callback never
    ran. Subclasses ``AssertionError`` so pytest reports it as a test
    failure rather than an error in the test harness.

    Example:
        >>> raise CallbackNotInvokedError("save callback not invoked within 1.0s")
    """

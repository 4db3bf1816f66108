"""Error and warning types raised by patternkit."""


class ConfigurationError(ValueError):
    """A cache or chain was configured with invalid arguments.

    Raised at call or build time (never deferred to first use): a missing or
    non-callable factory, a chain with no base component, a stage spec that
    cannot be turned into a stage, or an invalid cache policy.
    """


class TransformMismatchWarning(UserWarning):
    """An inverse transform met a payload that lacks its expected marker.

    The payload is passed through unchanged. Tests can turn this into an error
    with ``warnings.simplefilter("error", TransformMismatchWarning)``.
    """


class TransformMismatchError(ValueError):
    """Raised instead of TransformMismatchWarning by stages built with strict=True."""

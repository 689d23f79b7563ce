"""Exception hierarchy for auto-typings."""


class TypingsError(Exception):
    """Base exception for all declaration resolution errors."""


class SourceFetchError(TypingsError):
    """Declaration source could not be fetched (transport error, unexpected status)."""


class ConfigError(TypingsError):
    """Settings exist but could not be loaded (parse error, invalid values)."""


class ResolutionInvariantError(RuntimeError):
    """Resolution reached a state that correct recursion never produces.

    Signals a logic defect rather than bad input, so it is deliberately kept
    outside the TypingsError hierarchy and is never routed to on_error.
    """

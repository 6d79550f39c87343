"""Exceptions raised on unusable configuration."""

MISSING_ICE_PARAMETERS = 201
DUPLICATE_MUD_PARAMETERS = 202


class IceConfigurationError(ValueError):
    """Required configuration is missing or contradictory.

    These errors are not recoverable: a driver catching one is expected to
    stop the run. The numeric `code` is the exit status a driver should use.

    Parameters
    ----------
    message : str
        Human-readable diagnostic.
    code : int
        Exit status associated with the error.

    """

    def __init__(self, message: str, code: int = MISSING_ICE_PARAMETERS):
        super().__init__(message)
        self.code = code


def missing_parameters(what: str = "ICE PARAMETERS") -> IceConfigurationError:
    return IceConfigurationError(
        f"{what} REQUIRED BUT NOT SELECTED", MISSING_ICE_PARAMETERS
    )

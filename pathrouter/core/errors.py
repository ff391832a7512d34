"""Errors raised while registering routes or loading route definitions.

A path that matches nothing is not an error: ``Router.match`` returns ``None``.
"""


class RouterError(Exception):
    """Base for all router errors."""


class InvalidTargetError(RouterError, ValueError):
    """The target is not a ``"controller#action"`` string or a mapping with
    ``controller`` and ``action`` keys."""


class InvalidPatternError(RouterError, ValueError):
    """The pattern declares an unnamed or repeated ``:param`` segment."""


class RouteProviderError(RouterError):
    """Route definitions could not be obtained from the provider."""

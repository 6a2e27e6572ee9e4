"""Exceptions raised by the route risk pipeline."""


class AssessmentError(Exception):
    """A hard failure that aborts a pipeline run."""

    code = "assessment_error"


class NotFound(AssessmentError):
    """The geocoder returned no candidate for an address."""

    code = "not_found"


class NoRouteFound(AssessmentError):
    """The routing service reported no viable route."""

    code = "no_route"


class ProviderError(AssessmentError):
    """A hard-dependency provider call failed (transport, status, or body)."""

    code = "provider_error"


class RunCancelled(Exception):
    """The run was superseded by a newer run before it finished."""

# -*- coding: utf-8 -*-
"""
Errors and warnings raised by the fetch engine.

Errors stop the computation. Warnings are emitted through ``warnings.warn``
so callers can filter them or turn them into errors.
"""


class FetchError(Exception):
    """Base class for all fetch computation errors."""


class InvalidParameter(FetchError, ValueError):
    """A parameter is out of range or of the wrong type."""


class UnprojectedInputError(FetchError):
    """Neither the obstruction layer nor the site layer is projected."""


class SiteOnLandError(FetchError):
    """A site lies inside or on the boundary of an obstruction polygon."""

    def __init__(self, site_name: str, index: int):
        self.site_name = site_name
        self.index = index
        super().__init__(
            f"site '{site_name}' (index {index}) is on land; "
            "fetch can only be calculated for marine locations"
        )


class FetchWarning(UserWarning):
    """Base class for recoverable fetch conditions."""


class CrsMismatchWarning(FetchWarning):
    """Both layers are projected but with different coordinate systems."""


class NonLinearUnitWarning(FetchWarning):
    """The CRS unit is not metres, or could not be determined."""


class InvalidParameterWarning(FetchWarning):
    """A parameter was replaced by its default value."""

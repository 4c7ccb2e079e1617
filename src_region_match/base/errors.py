"""
Exception types shared by the region matching and mosaic modules.

Size mismatches are recoverable inside a correspondence scan (the candidate is
skipped). Out-of-bounds conditions are fatal for the single operation that
raised them.
"""


class RegionMatchError(Exception):
    """Base class for all region matching errors."""


class RegionOutOfBoundsError(RegionMatchError, IndexError):
    """A requested region or index lies outside the owning image."""


class RegionSizeMismatchError(RegionMatchError, ValueError):
    """Two regions given to the SSD scorer do not have the same shape."""


class ImageShapeMismatchError(RegionMatchError, ValueError):
    """Left and right images cannot be processed together."""


class DegenerateDisplacementError(RegionOutOfBoundsError):
    """The estimated shift cannot be used to build a mosaic."""

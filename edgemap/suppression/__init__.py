"""Non-maximal suppression stage."""

from edgemap.suppression.nms import NEIGHBOUR_OFFSETS, suppress

__all__ = ["NEIGHBOUR_OFFSETS", "suppress"]

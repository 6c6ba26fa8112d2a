"""Edge detection file stage — read an image, run a pipeline, save the edge PNG."""

from edgemap.edges.canny import compute_canny_edges, compute_sobel_edges, image_from_raster, raster_from_image

__all__ = ["compute_canny_edges", "compute_sobel_edges", "image_from_raster", "raster_from_image"]

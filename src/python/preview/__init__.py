"""Preview module for output and visualization.

Components:
    canvas: Pixel buffer with plain-text PPM serialization
    display: Matplotlib-based preview display
    export: PPM/PNG image export utilities

Example:
    >>> from src.python.preview import save_image, show_preview
    >>> save_image(canvas, "spheres.png")
    >>> show_preview(canvas)
"""

from src.python.preview.canvas import PPM_MAX_COLOR, PPM_MAX_LINE_LENGTH, Canvas
from src.python.preview.display import (
    apply_gamma,
    process_image_for_display,
    show_preview,
)
from src.python.preview.export import (
    compute_rmse,
    image_to_uint8,
    save_image,
    save_png,
    save_ppm,
)

__all__ = [
    # Canvas
    "Canvas",
    "PPM_MAX_COLOR",
    "PPM_MAX_LINE_LENGTH",
    # Display functions
    "show_preview",
    "apply_gamma",
    "process_image_for_display",
    # Export functions
    "save_image",
    "save_ppm",
    "save_png",
    "image_to_uint8",
    "compute_rmse",
]

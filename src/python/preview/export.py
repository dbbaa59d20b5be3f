"""Image export utilities for rendered canvases.

Supported formats:
    - PPM (plain-text P3, written by Canvas.to_ppm)
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.python.preview.export import save_image
    >>> save_image(canvas, "spheres.png")
    >>> save_image(canvas, "spheres.ppm")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.python.preview.canvas import Canvas
from src.python.preview.display import process_image_for_display


def save_ppm(canvas: Canvas, filepath: str | Path) -> None:
    """Write the canvas as a plain-text PPM file."""
    Path(filepath).write_text(canvas.to_ppm(), encoding="ascii")


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8, clamping to the displayable range.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value.

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    processed = process_image_for_display(image, gamma=gamma)
    # Round to nearest, matching the PPM writer
    return np.floor(processed * 255 + 0.5).astype(np.uint8)


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    gamma: float = 1.0,
) -> None:
    """Save the canvas as an 8-bit RGB PNG file.

    Args:
        canvas: The rendered canvas.
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value (1.0 writes linear values).
    """
    image_uint8 = image_to_uint8(canvas.to_numpy(), gamma=gamma)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(str(filepath))


def save_image(canvas: Canvas, filepath: str | Path, *, gamma: float = 1.0) -> None:
    """Save the canvas, choosing PPM or PNG from the file extension.

    Raises:
        ValueError: If the extension is neither .ppm nor .png.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm(canvas, filepath)
    elif suffix == ".png":
        save_png(canvas, filepath, gamma=gamma)
    else:
        raise ValueError(f"Unsupported image format: {suffix!r} (use .ppm or .png)")


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))

"""Matplotlib-based preview display for rendered canvases.

Phong shading is unclamped (a bright highlight easily exceeds 1.0), so every
display or export path goes through process_image_for_display(), which
applies optional gamma correction and clamps to [0, 1].

Example:
    >>> from src.python.camera.pinhole import Camera, render
    >>> from src.python.preview.display import show_preview
    >>> canvas = render(Camera(100, 50, 1.0472), world)
    >>> show_preview(canvas)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from src.python.preview.canvas import Canvas


def apply_gamma(
    image: npt.NDArray[np.floating],
    gamma: float = 2.2,
) -> npt.NDArray[np.floating]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value. 1.0 leaves the image unchanged.

    Returns:
        Gamma corrected image.
    """
    if gamma == 1.0:
        return image

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)
    return np.power(image, 1.0 / gamma)


def process_image_for_display(
    image: npt.NDArray[np.floating],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Gamma correct and clamp an image to the displayable [0, 1] range.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (1.0 keeps linear values).

    Returns:
        Processed float32 image in [0, 1].
    """
    result = apply_gamma(image.copy(), gamma)
    result = np.clip(result, 0.0, 1.0)
    return result.astype(np.float32)


def show_preview(
    canvas: Canvas,
    *,
    gamma: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a canvas as a Matplotlib figure.

    Args:
        canvas: The rendered canvas.
        gamma: Gamma correction value.
        title: Custom title (default shows the canvas size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(canvas.to_numpy(), gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {canvas.width}x{canvas.height}")

    plt.tight_layout()
    plt.show(block=block)

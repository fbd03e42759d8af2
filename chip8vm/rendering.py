"""CHIP-8 rendering utilities: pixel buffer mapping and visualization."""

import jax.numpy as jnp
import numpy as np
from typing import Tuple

from PIL import Image

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, PIXEL_ON_COLOR, PIXEL_OFF_COLOR

_COLUMN_SHIFTS = np.arange(SCREEN_WIDTH - 1, -1, -1, dtype=np.uint64)


def display_to_bool(display: jnp.ndarray) -> np.ndarray:
    """Unpack the 64-bit row masks into a (32, 64) boolean pixel array."""
    rows = np.asarray(display, dtype=np.uint64)
    return ((rows[:, None] >> _COLUMN_SHIFTS) & np.uint64(1)).astype(np.bool_)


def map_pixels(
    display: jnp.ndarray,
    on_color: int = PIXEL_ON_COLOR,
    off_color: int = PIXEL_OFF_COLOR,
) -> np.ndarray:
    """Map the display to a row-major buffer of packed 0xRRGGBB pixels.

    Returns:
        uint32 array of length SCREEN_WIDTH * SCREEN_HEIGHT
    """
    pixels = display_to_bool(display)
    return np.where(pixels, np.uint32(on_color), np.uint32(off_color)).astype(np.uint32).reshape(-1)


def unpack_color(color: int) -> Tuple[int, int, int]:
    """Split a packed 0xRRGGBB color into an RGB tuple."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def chip8_display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Tuple[int, int, int] = unpack_color(PIXEL_ON_COLOR),
    off_color: Tuple[int, int, int] = unpack_color(PIXEL_OFF_COLOR),
) -> np.ndarray:
    """Convert the CHIP-8 display to an RGB array with optional upscaling.

    Args:
        display: Array of 32 uint64 row masks
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels
        off_color: RGB color for "off" pixels

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    pixels = display_to_bool(display)

    rgb_frame = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbor upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "default",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("default", "classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "default": (unpack_color(PIXEL_ON_COLOR), unpack_color(PIXEL_OFF_COLOR)),
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def save_screenshot(
    display: jnp.ndarray,
    filename: str,
    scale: int = 8,
    color_scheme: str = "default",
) -> None:
    """Save the display as an image file."""
    on_color, off_color = create_color_scheme(color_scheme)
    rgb = chip8_display_to_rgb(display, scale, on_color, off_color)
    Image.fromarray(rgb).save(filename)

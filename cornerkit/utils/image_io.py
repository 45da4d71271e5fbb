"""
Image loading for the pipeline driver.

Thin wrapper around PIL and scikit-image returning the float32 grayscale
maps the rest of the package works on.
"""

import numpy as np
from PIL import Image
from skimage.color import rgb2gray


def load_grayscale(path: str) -> np.ndarray:
    """Load an image file as an H x W float32 grayscale array in [0, 1].

    Parameters
    ----------
    path : str
        Path to any format Pillow can read.

    Returns
    -------
    np.ndarray
        H x W float32 image.
    """
    img = np.array(Image.open(path).convert("RGB"))
    return rgb2gray(img).astype(np.float32)

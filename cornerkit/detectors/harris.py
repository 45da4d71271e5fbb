"""
Harris corner intensity.

Produces the per-pixel response map consumed by the corner extractors.
Regions where image gradients change strongly in multiple directions yield
large eigenvalues of the structure tensor and therefore high intensity.
"""

import numpy as np
from skimage.feature import corner_harris

from cornerkit.structs.image import as_image_array


def harris_intensity(image, k: float = 0.05, sigma: float = 1.0) -> np.ndarray:
    """Compute the Harris response map of a grayscale image.

    Parameters
    ----------
    image : ImageView or np.ndarray
        Grayscale image (H x W), ideally float in [0, 1].
    k : float
        Sensitivity factor separating corners from edges.
    sigma : float
        Standard deviation of the Gaussian window of the structure tensor.

    Returns
    -------
    np.ndarray
        H x W float32 corner response.
    """
    img = as_image_array(image).astype(np.float64)
    h = corner_harris(img, method="k", k=k, sigma=sigma)
    return h.astype(np.float32)

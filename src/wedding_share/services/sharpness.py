"""Image sharpness scoring."""

from dataclasses import dataclass
from typing import Protocol

import cv2
import numpy as np


class SharpnessProbe(Protocol):
    """Interface for scoring image sharpness."""

    def score(self, image_bytes: bytes) -> float:
        """Return an edge-variance score; higher is sharper."""


@dataclass
class LaplacianSharpnessProbe(SharpnessProbe):
    """Variance of the Laplacian over the grayscale image."""

    max_edge: int = 1024

    def score(self, image_bytes: bytes) -> float:
        buffer = np.frombuffer(image_bytes, dtype=np.uint8)
        image = cv2.imdecode(buffer, cv2.IMREAD_GRAYSCALE)
        if image is None:
            raise ValueError("Could not decode image for sharpness check")
        height, width = image.shape[:2]
        longest = max(height, width)
        if longest > self.max_edge:
            scale = self.max_edge / longest
            image = cv2.resize(
                image,
                (int(width * scale), int(height * scale)),
                interpolation=cv2.INTER_AREA,
            )
        return float(cv2.Laplacian(image, cv2.CV_64F).var())

"""
cova/topology/cloud.py

Finite point clouds in R^n with a metric.

A Cloud is the read-only input of a filtration: points are copied into a
float64 array that is flagged non-writeable, so concurrent builders can
share one cloud without copying.
"""

from __future__ import annotations

from typing import Any, Iterator

import numpy as np
from scipy.spatial.distance import cdist, pdist, squareform


class Cloud:
    """
    Ordered point set with a scipy distance metric.

    Args:
        points: (n_points, n_features) array-like; a 1-D sequence is read as
            n points on the real line. An empty sequence gives an empty cloud.
        metric: Any metric name accepted by scipy.spatial.distance.pdist.
    """

    def __init__(self, points: Any, metric: str = "euclidean"):
        pts = np.array(points, dtype=np.float64)
        if pts.ndim == 1:
            pts = pts.reshape(-1, 1) if pts.size else pts.reshape(0, 0)
        elif pts.ndim != 2:
            raise ValueError(f"Cloud points must be 1-D or 2-D, got shape {pts.shape}")
        pts.setflags(write=False)
        self._points = pts
        self.metric = metric

    @property
    def points(self) -> np.ndarray:
        return self._points

    @property
    def ambient_dimension(self) -> int:
        return self._points.shape[1]

    def __len__(self) -> int:
        return self._points.shape[0]

    def __getitem__(self, i: int) -> np.ndarray:
        return self._points[i]

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self._points)

    def is_empty(self) -> bool:
        return len(self) == 0

    def distance(self, i: int, j: int) -> float:
        """Distance between the i-th and j-th points."""
        a = self._points[i].reshape(1, -1)
        b = self._points[j].reshape(1, -1)
        return float(cdist(a, b, metric=self.metric)[0, 0])

    def distance_matrix(self) -> np.ndarray:
        """Symmetric (n, n) distance matrix."""
        n = len(self)
        if n < 2:
            return np.zeros((n, n), dtype=np.float64)
        return squareform(pdist(self._points, metric=self.metric))

    def diameter(self) -> float:
        """Largest pairwise distance (0.0 for fewer than two points)."""
        d = self.distance_matrix()
        return float(d.max()) if d.size else 0.0

    def __repr__(self) -> str:
        return f"Cloud(n_points={len(self)}, dim={self.ambient_dimension}, metric={self.metric!r})"

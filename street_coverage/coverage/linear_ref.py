"""Linear referencing along a two-point reference line."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from ..models import Coordinate

FractionArray = NDArray[np.float64]


def locate_point(
    start: Coordinate,
    end: Coordinate,
    point: Coordinate,
    *,
    clamp: bool = True,
) -> Optional[float]:
    """Return the fractional position of ``point`` projected onto ``start -> end``.

    0.0 is the start node and 1.0 the end node. With ``clamp`` disabled the
    fraction is measured along the infinite extension of the line and may fall
    outside ``[0, 1]``. Returns ``None`` when the line is degenerate.
    """

    fractions = locate_points(start, end, [point], clamp=clamp)
    if fractions is None:
        return None
    return float(fractions[0])


def locate_points(
    start: Coordinate,
    end: Coordinate,
    points: Sequence[Coordinate],
    *,
    clamp: bool = True,
) -> Optional[FractionArray]:
    """Vectorised :func:`locate_point` for many query points."""

    origin = np.asarray(start, dtype=float)
    seg_vec = np.asarray(end, dtype=float) - origin
    seg_len_sq = float(np.dot(seg_vec, seg_vec))
    if seg_len_sq == 0.0:
        return None
    if len(points) == 0:
        return np.empty(0, dtype=float)
    vec_to_points = np.asarray(points, dtype=float).reshape(-1, 2) - origin
    fractions = (vec_to_points @ seg_vec) / seg_len_sq
    if clamp:
        fractions = np.clip(fractions, 0.0, 1.0)
    return fractions


__all__ = ["locate_point", "locate_points"]

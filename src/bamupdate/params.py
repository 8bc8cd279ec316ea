"""
Parameter Sets

A ParameterSet is the structured bundle a model keeps its parameters in:

    vector  - optional 1-D array, length V
    matrix  - optional 2-D array, R x C
    weights - optional 1-D array, length R (or V when there is no matrix)
    more    - optional next page, another ParameterSet
    title   - page title; titles in angle brackets (e.g. '<Covariance>')
              mark metadata "info pages" that the codec skips by default

Every array is stored as its own float64 copy, so two ParameterSets never
share memory unless one was explicitly built from the other's arrays.
"""

import copy
import re
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .error_handling import ConfigurationError, SizeMismatchError


INFO_PAGE_PATTERN = re.compile(r"^<.*>$")


def _as_float_array(values, ndim, part):
    if values is None:
        return None
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != ndim:
        raise ConfigurationError(f"ParameterSet {part} must be {ndim}-D, got shape {arr.shape}")
    return arr


@dataclass(eq=False)
class ParameterSet:
    """
    Structured parameter bundle with optional vector, matrix, weights and
    chained pages.

    Fields:
        vector: Ordered numeric sequence, or None
        matrix: Rectangular grid (rows x cols), or None
        weights: Per-row weights, or None
        more: Next page, or None
        title: Page title; '<...>' marks an info page

    Example:
        # Vector of 2 plus a 2x3 matrix
        ps = ParameterSet(vector=[0.5, 1.0], matrix=np.zeros((2, 3)))
    """
    vector: Optional[np.ndarray] = None
    matrix: Optional[np.ndarray] = None
    weights: Optional[np.ndarray] = None
    more: Optional['ParameterSet'] = None
    title: str = ""

    def __post_init__(self):
        self.vector = _as_float_array(self.vector, 1, 'vector')
        self.matrix = _as_float_array(self.matrix, 2, 'matrix')
        self.weights = _as_float_array(self.weights, 1, 'weights')

        if self.weights is not None:
            if self.matrix is not None:
                expected = self.matrix.shape[0]
            elif self.vector is not None:
                expected = self.vector.shape[0]
            else:
                expected = None
            if expected is not None and self.weights.shape[0] != expected:
                raise ConfigurationError(
                    f"weights length ({self.weights.shape[0]}) must equal the row count ({expected})"
                )

        if self.more is not None and not isinstance(self.more, ParameterSet):
            raise ConfigurationError(f"more must be a ParameterSet, got {type(self.more).__name__}")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def alloc(cls, vsize: int = 0, rows: int = 0, cols: int = 0, fill: float = 0.0,
              title: str = "") -> 'ParameterSet':
        """
        Allocate a ParameterSet with every element set to ``fill``.

        A part whose size is zero is left as None. A matrix needs both
        rows and cols to be positive.
        """
        if vsize < 0 or rows < 0 or cols < 0:
            raise ConfigurationError(
                f"ParameterSet sizes must be >= 0, got vsize={vsize}, rows={rows}, cols={cols}"
            )
        vector = np.full(vsize, fill, dtype=np.float64) if vsize > 0 else None
        matrix = np.full((rows, cols), fill, dtype=np.float64) if rows > 0 and cols > 0 else None
        return cls(vector=vector, matrix=matrix, title=title)

    @classmethod
    def from_line(cls, line: Sequence[float], vsize: int, rows: int, cols: int) -> 'ParameterSet':
        """
        Build a ParameterSet from a flat line laid out row by row.

        If both a vector and a matrix are requested, each row of the line is
        the vector element followed by that row of the matrix, so
        ``from_line([0, 1, 2, 3, 4, 5], 2, 2, 2)`` gives vector [0, 3] and
        matrix [[1, 2], [4, 5]]. Vector-only and matrix-only forms read the
        line directly.
        """
        line = np.asarray(line, dtype=np.float64).ravel()
        if vsize == 0 and rows > 0 and cols > 0:
            needed = rows * cols
            if line.size < needed:
                raise SizeMismatchError(f"line has {line.size} elements, need {needed}")
            return cls(matrix=line[:needed].reshape(rows, cols))
        if (rows == 0 or cols == 0) and vsize > 0:
            if line.size < vsize:
                raise SizeMismatchError(f"line has {line.size} elements, need {vsize}")
            return cls(vector=line[:vsize])
        if vsize != rows:
            raise ConfigurationError(
                "from_line expects only a matrix, only a vector, or a vector whose size "
                f"equals the matrix row count; got vsize={vsize}, rows={rows}"
            )
        needed = rows * (cols + 1)
        if line.size < needed:
            raise SizeMismatchError(f"line has {line.size} elements, need {needed}")
        grid = line[:needed].reshape(rows, cols + 1)
        return cls(vector=grid[:, 0], matrix=grid[:, 1:])

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def is_info_page(self) -> bool:
        return bool(INFO_PAGE_PATTERN.match(self.title or ""))

    @property
    def page_size(self) -> int:
        """Number of numeric elements on this page only."""
        return ((self.vector.size if self.vector is not None else 0)
                + (self.matrix.size if self.matrix is not None else 0)
                + (self.weights.size if self.weights is not None else 0))

    def size(self, all_pages: bool = False, use_info_pages: bool = False) -> int:
        """Flattened length; see codec.size_count."""
        from .codec import size_count
        return size_count(self, all_pages=all_pages, use_info_pages=use_info_pages)

    def same_shape(self, other: 'ParameterSet') -> bool:
        """True if both pages have the same parts with the same shapes (first page only)."""
        def shape_of(arr):
            return None if arr is None else arr.shape
        return (shape_of(self.vector) == shape_of(other.vector)
                and shape_of(self.matrix) == shape_of(other.matrix)
                and shape_of(self.weights) == shape_of(other.weights))

    def pages(self):
        """Iterate over this page and every chained page."""
        page = self
        while page is not None:
            yield page
            page = page.more

    # ------------------------------------------------------------------
    # Copying and filling
    # ------------------------------------------------------------------

    def copy(self) -> 'ParameterSet':
        """Deep copy, including chained pages."""
        return copy.deepcopy(self)

    def copy_from(self, other: 'ParameterSet') -> 'ParameterSet':
        """
        Overwrite this set's numeric content in place with ``other``'s.

        Both sets must have the same parts and shapes on every page that
        ``other`` provides. Returns self.
        """
        target = self
        for source in other.pages():
            if target is None or not target.same_shape(source):
                raise SizeMismatchError(
                    "copy_from needs structurally identical ParameterSets"
                )
            for part in ('vector', 'matrix', 'weights'):
                src = getattr(source, part)
                if src is not None:
                    getattr(target, part)[...] = src
            target = target.more
        return self

    def fill(self, *values: float) -> 'ParameterSet':
        """
        Fill this page row by row: for each row, the vector element (if any)
        then the matrix row (if any). Needs exactly as many values as there
        are cells. Returns self.
        """
        height = 0
        width = 0
        if self.vector is not None:
            height = self.vector.size
            width += 1
        if self.matrix is not None:
            height = self.matrix.shape[0]
            width += self.matrix.shape[1]
        if len(values) != height * width:
            raise SizeMismatchError(f"fill needs {height * width} values, got {len(values)}")
        grid = np.asarray(values, dtype=np.float64).reshape(height, width)
        if self.vector is not None:
            self.vector[:] = grid[:, 0]
            grid = grid[:, 1:]
        if self.matrix is not None:
            self.matrix[...] = grid
        return self

    def set_all(self, value: float) -> 'ParameterSet':
        """Set every vector and matrix element of this page to ``value``."""
        if self.vector is not None:
            self.vector.fill(value)
        if self.matrix is not None:
            self.matrix.fill(value)
        return self

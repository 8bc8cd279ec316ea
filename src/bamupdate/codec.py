"""
Parameter Vector Codec

Packs a ParameterSet into one contiguous float64 buffer and writes such a
buffer back into a ParameterSet. The sampler uses these to move candidate
parameters between prior draws, likelihood slots and the sample log.

Layout of a flattened page:
    [vector..., matrix row 0..., matrix row 1..., ..., weights...]
followed, when chained pages are requested, by the next page's layout.

Info pages (titles like '<Covariance>') are skipped unless
use_info_pages=True. Use the same setting for flatten and unflatten.
"""

from typing import Optional

import numpy as np

from .error_handling import ConfigurationError, SizeMismatchError
from .params import ParameterSet


def size_count(params: Optional[ParameterSet], all_pages: bool = False,
               use_info_pages: bool = False) -> int:
    """
    Number of elements flatten() will produce.

    Args:
        params: ParameterSet, or None (size 0)
        all_pages: Follow the ``more`` chain
        use_info_pages: Count info pages instead of skipping them

    Returns:
        Total element count
    """
    if params is None:
        return 0
    if not use_info_pages and params.is_info_page:
        return size_count(params.more, all_pages, use_info_pages) if all_pages else 0
    total = params.page_size
    if all_pages:
        total += size_count(params.more, all_pages, use_info_pages)
    return total


def _next_data_page(page: Optional[ParameterSet], use_info_pages: bool) -> Optional[ParameterSet]:
    while page is not None and not use_info_pages and page.is_info_page:
        page = page.more
    return page


def _pack_page(page: ParameterSet, out: np.ndarray, offset: int) -> int:
    if page.vector is not None:
        out[offset:offset + page.vector.size] = page.vector
        offset += page.vector.size
    if page.matrix is not None:
        # C-ordered ravel is the row-major layout
        out[offset:offset + page.matrix.size] = page.matrix.ravel()
        offset += page.matrix.size
    if page.weights is not None:
        out[offset:offset + page.weights.size] = page.weights
        offset += page.weights.size
    return offset


def flatten(params: Optional[ParameterSet], out: Optional[np.ndarray] = None,
            all_pages: bool = False, use_info_pages: bool = False) -> Optional[np.ndarray]:
    """
    Flatten a ParameterSet into a single 1-D float64 buffer.

    Args:
        params: The ParameterSet to flatten. None returns None.
        out: Optional destination buffer. Its length must equal the total
             size exactly; it is filled in place and returned.
        all_pages: Also flatten the chained ``more`` pages.
        use_info_pages: Include info pages instead of skipping them.

    Returns:
        The filled buffer, or None if there is nothing to flatten.

    Raises:
        SizeMismatchError: If ``out`` has the wrong length.
    """
    if params is None:
        return None

    total_size = size_count(params, all_pages=all_pages, use_info_pages=use_info_pages)
    if out is not None:
        if out.ndim != 1 or out.shape[0] != total_size:
            raise SizeMismatchError(
                f"The input ParameterSet has {total_size} elements, but the output "
                f"buffer you want to fill has shape {out.shape}. Please make these sizes equal."
            )
    if total_size == 0:
        return None
    if out is None:
        out = np.empty(total_size, dtype=np.float64)

    page = _next_data_page(params, use_info_pages)
    offset = _pack_page(page, out, 0)
    if all_pages:
        page = _next_data_page(page.more, use_info_pages)
        while page is not None:
            offset = _pack_page(page, out, offset)
            page = _next_data_page(page.more, use_info_pages)
    return out


def unflatten(buffer, params: ParameterSet, use_info_pages: bool = False) -> ParameterSet:
    """
    Write a flat buffer back into an existing ParameterSet.

    Fills vector, matrix rows and weights of the first page in the same
    order flatten() uses. If buffer remains and the target has a ``more``
    page, unflattening continues there (skipping info pages unless
    use_info_pages=True). The target's shapes are never changed.

    Args:
        buffer: 1-D sequence of floats, as produced by flatten()
        params: The ParameterSet to fill
        use_info_pages: Fill info pages instead of skipping them

    Returns:
        The filled ParameterSet (same object as ``params``)

    Raises:
        SizeMismatchError: If the buffer is too short for the target.
    """
    if params is None:
        raise ConfigurationError("the ParameterSet to be filled must not be None")
    buffer = np.asarray(buffer, dtype=np.float64).ravel()

    offset = 0
    page = _next_data_page(params, use_info_pages)
    while page is not None:
        needed = page.page_size
        if buffer.size - offset < needed:
            raise SizeMismatchError(
                f"Buffer has {buffer.size - offset} elements left, but the page being "
                f"filled needs {needed}."
            )
        if page.vector is not None:
            page.vector[:] = buffer[offset:offset + page.vector.size]
            offset += page.vector.size
        if page.matrix is not None:
            rows, cols = page.matrix.shape
            page.matrix[...] = buffer[offset:offset + rows * cols].reshape(rows, cols)
            offset += rows * cols
        if page.weights is not None:
            page.weights[:] = buffer[offset:offset + page.weights.size]
            offset += page.weights.size

        if offset == buffer.size:
            break
        page = _next_data_page(page.more, use_info_pages)
    return params

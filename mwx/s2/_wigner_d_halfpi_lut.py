# Copyright 2024 The mwx Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""Lookup table with Wigner-d matrices evaluated at :math:`\beta=\pi/2`."""

import argparse
import math
from typing import IO, Tuple, TypedDict, cast
from absl import logging
from etils import epath
import jaxtyping
import numpy as np

from .._options import check_dl_method_is_valid
from .._options import DlMethod
from ..config import Config
from ._common import _check_band_limit_is_positive
from ._lookup_table_generation_utility import _load_lookup_table_from_disk
from ._lookup_table_generation_utility import _print_cache_usage_information
from ._lookup_table_generation_utility import _save_lookup_table_to_disk
from .wigner import _wigner_d_blocks

Array = jaxtyping.Array
Float = jaxtyping.Float


_wigner_d_halfpi_lut_name = 'Wigner-d (beta=pi/2)'


class WignerDHalfPiLookupTable(TypedDict):
  """A lookup table with Wigner-d matrices evaluated at beta=pi/2.

  Attributes:
    max_degree: Maximum degree of the stored matrices (-1 if empty).
    method: Recursion method that was used to generate the matrices.
    dl: Stacked matrices, entry ``[l]`` holds the matrix of degree ``l``
      embedded (centered) in an array of shape
      ``(2*max_degree+1, 2*max_degree+1)``.
  """

  max_degree: int
  method: str
  dl: Float[Array, 'max_degree+1 2*max_degree+1 2*max_degree+1']


def _generate_wigner_d_halfpi_lookup_table(
    max_degree: int, method: DlMethod
) -> WignerDHalfPiLookupTable:
  """Generates (or loads) a table with Wigner-d matrices at beta=pi/2."""
  if max_degree < 0:
    raise ValueError(
        f'max_degree must be positive or zero, received {max_degree}'
    )
  check_dl_method_is_valid(method)

  def _init_empty_lookup_table() -> WignerDHalfPiLookupTable:
    return WignerDHalfPiLookupTable(
        max_degree=-1, method=method, dl=np.zeros((0, 1, 1), dtype=np.float64)
    )

  # Maximum degree of a cached table that was generated with another method.
  other_method_max_degree = -1

  def _load_from_cache(
      f: IO[bytes],
  ) -> Tuple[int, WignerDHalfPiLookupTable]:
    nonlocal other_method_max_degree
    with np.load(f) as cache:
      cached_max_degree = int(cache['max_degree'])
      cached_method = str(cache['method'])
      if cached_method != method:
        other_method_max_degree = cached_max_degree
        logging.info(
            'Cached %s lookup table was generated with method=%s, ignoring it'
            ' (requested method=%s).',
            _wigner_d_halfpi_lut_name,
            cached_method,
            method,
        )
        return -1, _init_empty_lookup_table()
      return cached_max_degree, WignerDHalfPiLookupTable(
          max_degree=cached_max_degree,
          method=cached_method,
          dl=np.asarray(cache['dl'], dtype=np.float64),
      )

  # Load cache stored on disk.
  cached_max_degree, lookup_table = _load_lookup_table_from_disk(
      lookup_table_name=_wigner_d_halfpi_lut_name,
      config_cache_path=Config.wigner_d_halfpi_cache,
      load_from_cache=_load_from_cache,
      init_empty_lookup_table=_init_empty_lookup_table,
  )
  lookup_table = cast(WignerDHalfPiLookupTable, lookup_table)

  # Return immediately if all values are contained.
  if max_degree <= cached_max_degree:
    return lookup_table

  lstart = cached_max_degree + 1  # Start generation from degree=lstart.
  _print_cache_usage_information(
      lstart=lstart,
      max_degree=max_degree,
      config_cache_path=Config.wigner_d_halfpi_cache,
      set_cache_method_name='set_wigner_d_halfpi_cache',
      lookup_table_name=_wigner_d_halfpi_lut_name,
  )

  # Re-embed cached matrices in the larger array.
  size = 2 * max_degree + 1
  dl = np.zeros((max_degree + 1, size, size), dtype=np.float64)
  if cached_max_degree >= 0:
    start = lookup_table['dl'][cached_max_degree]
    i = max_degree - cached_max_degree
    j = i + 2 * cached_max_degree + 1
    dl[:lstart, i:j, i:j] = lookup_table['dl']
  else:
    start = None

  # Continue the recursion from the last cached degree.
  blocks = _wigner_d_blocks(max_degree + 1, math.pi / 2, method, start=start)
  for l, block in zip(range(lstart, max_degree + 1), blocks):
    a = max_degree - l
    b = max_degree + l + 1
    dl[l, a:b, a:b] = block

  lookup_table = WignerDHalfPiLookupTable(
      max_degree=max_degree, method=method, dl=dl
  )

  # Save lookup table to disk cache (never replace a larger cached table).
  if other_method_max_degree >= max_degree:
    logging.info(
        'Not saving %s lookup table with method=%s, the cache already holds'
        ' a table with larger or equal max_degree=%d.',
        _wigner_d_halfpi_lut_name,
        method,
        other_method_max_degree,
    )
    return lookup_table
  _save_lookup_table_to_disk(
      lookup_table=dict(lookup_table),
      lookup_table_name=_wigner_d_halfpi_lut_name,
      config_cache_path=Config.wigner_d_halfpi_cache,
  )

  return lookup_table


def _wigner_d_halfpi(
    L: int, method: DlMethod
) -> Float[Array, 'L 2*L-1 2*L-1']:
  """Wigner-d matrices at beta=pi/2 for all l < L, embedded for band-limit L."""
  _check_band_limit_is_positive(L)
  lookup_table = _generate_wigner_d_halfpi_lookup_table(L - 1, method)
  c = lookup_table['max_degree']
  return lookup_table['dl'][:L, c - L + 1 : c + L, c - L + 1 : c + L]


if __name__ == '__main__':
  parser = argparse.ArgumentParser(
      description=(
          'Generates lookup tables with Wigner-d matrices at beta=pi/2.'
      )
  )
  parser.add_argument(
      '--max_degree',
      required=True,
      type=int,
      help='Maximum degree of the Wigner-d matrices.',
  )
  parser.add_argument(
      '--path',
      required=True,
      type=str,
      help='Path to .npz file for storing the lookup table.',
  )
  parser.add_argument(
      '--method',
      required=False,
      type=str,
      default=Config.dl_method,
      help='Recursion method (risbo or trapani).',
  )
  args = parser.parse_args()
  logging.set_verbosity(logging.INFO)
  Config.set_wigner_d_halfpi_cache(args.path)
  _generate_wigner_d_halfpi_lookup_table(
      max_degree=args.max_degree, method=args.method
  )

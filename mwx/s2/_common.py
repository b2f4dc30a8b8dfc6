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

"""Common utility functions used in the s2 submodule."""

import jaxtyping
import numpy as np

Array = jaxtyping.Array
Integer = jaxtyping.Integer


def _check_band_limit_is_positive(band_limit: int, name: str = 'L') -> None:
  """Checks whether a band-limit is a positive integer."""
  if not isinstance(band_limit, (int, np.integer)) or band_limit < 1:
    raise ValueError(f'{name} must be a positive integer, received {band_limit}')


def _check_spin_is_valid(spin: int, L: int) -> None:
  """Checks whether |spin| is smaller than the band-limit."""
  if abs(spin) >= L:
    raise ValueError(f'spin must satisfy |spin| < L={L}, received {spin}')


def _check_shape(
    x: Array, expected: tuple[int, ...], name: str
) -> None:
  """Checks whether an array has the expected shape."""
  if x.shape != expected:
    raise ValueError(
        f'{name} must have shape {expected}, received shape {x.shape}'
    )


def _total_number_of_harmonics(L: int) -> int:
  """Calculates number of (l, m) pairs with l < L."""
  return L * L


def _degrees(L: int) -> Integer[Array, 'L**2']:
  """Degree l for every entry of a flattened coefficient vector."""
  degrees = np.arange(L)
  return np.repeat(degrees, 2 * degrees + 1)


def _orders(L: int) -> Integer[Array, 'L**2']:
  """Order m for every entry of a flattened coefficient vector."""
  ind = np.arange(L * L)
  return ind - _degrees(L) ** 2 - _degrees(L)


def _powers_of_i(k: Integer[Array, '...']) -> Array:
  """Returns i**k exactly for integer k."""
  return np.asarray([1.0, 1.0j, -1.0, -1.0j])[np.mod(k, 4)]


def _sign(k: Integer[Array, '...']) -> Array:
  """Returns (-1)**k for integer k."""
  return np.where(np.mod(k, 2) == 0, 1.0, -1.0)

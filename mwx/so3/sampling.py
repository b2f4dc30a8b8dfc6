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

r"""MW sampling of :math:`\mathrm{SO}(3)` and storage layouts of coefficients.

Signals on the rotation group are sampled on the grid

.. math::
  \alpha_a = \frac{2\pi a}{2L-1},\quad
  \beta_b = \frac{\pi(2b+1)}{2L-1},\quad
  \gamma_g = \frac{2\pi g}{2N-1},

with :math:`a=0,\dots,2L-2`, :math:`b=0,\dots,L-1` and :math:`g=0,\dots,2N-2`,
and stored in arrays of shape :math:`(2N-1, L, 2L-1)` (:math:`\gamma` is the
outermost dimension).

Wigner coefficients :math:`f^l_{mn}` vanish for :math:`l<|n|`. They are
flattened into vectors with one block per orientational frequency :math:`n`;
inside a block, coefficients are ordered like spherical harmonic coefficients.

* ``storage='padded'``: every block has length :math:`L^2` and holds explicit
  zeros for :math:`l<|n|`.
* ``storage='compact'``: the block of :math:`n` has length :math:`L^2-n^2` and
  starts with :math:`(l,m)=(|n|,-|n|)`.
* ``order='zero_first'``: blocks are ordered
  :math:`n=0,1,\dots,N-1,-N+1,\dots,-1`.
* ``order='neg_first'``: blocks are ordered :math:`n=-N+1,\dots,N-1`.

Real signals only store the blocks :math:`n\geq 0` (in increasing order), the
remaining coefficients follow from
:math:`f^l_{-m,-n}=(-1)^{m+n}\overline{f^l_{mn}}`.
"""

import math
from typing import Iterator
import jax.numpy as jnp
import jaxtyping

from .._options import check_order_is_valid
from .._options import check_storage_is_valid
from .._options import Order
from .._options import Storage
from ..config import Config
from ..s2._common import _check_band_limit_is_positive
from ..s2._common import _check_shape
from ..s2.sampling import mw_phis
from ..s2.sampling import mw_thetas

Array = jaxtyping.Array
Complex = jaxtyping.Complex
Float = jaxtyping.Float


def _check_band_limits(L: int, N: int) -> None:
  """Checks whether 1 <= N <= L."""
  _check_band_limit_is_positive(L, 'L')
  _check_band_limit_is_positive(N, 'N')
  if N > L:
    raise ValueError(f'N must not be larger than L={L}, received N={N}')


def _sum_of_squares(k: int) -> int:
  """Calculates 0**2 + 1**2 + ... + k**2 (zero for k < 1)."""
  if k < 1:
    return 0
  return k * (k + 1) * (2 * k + 1) // 6


def mw_grid_sizes(L: int, N: int) -> tuple[int, int, int]:
  """Returns the numbers of samples ``(n_alpha, n_beta, n_gamma)``.

  Args:
    L: Harmonic band-limit.
    N: Orientational band-limit.

  Returns:
    The tuple ``(2L-1, L, 2N-1)``.

  Raises:
    ValueError: If the band-limits are invalid.
  """
  _check_band_limits(L, N)
  return 2 * L - 1, L, 2 * N - 1


def mw_sample_shape(L: int, N: int) -> tuple[int, int, int]:
  """Returns the shape ``(2N-1, L, 2L-1)`` of an MW-sampled signal on SO(3)."""
  n_alpha, n_beta, n_gamma = mw_grid_sizes(L, N)
  return n_gamma, n_beta, n_alpha


def mw_sampling(
    L: int, N: int
) -> tuple[Float[Array, '2*L-1'], Float[Array, 'L'], Float[Array, '2*N-1']]:
  r"""Returns the Euler angles :math:`\alpha_a, \beta_b, \gamma_g` of the grid.

  Example:
    >>> import mwx
    >>> alphas, betas, gammas = mwx.so3.mw_sampling(3, 2)
    >>> alphas.shape, betas.shape, gammas.shape
    ((5,), (3,), (3,))

  Args:
    L: Harmonic band-limit.
    N: Orientational band-limit.

  Returns:
    A tuple of three arrays with the sampled Euler angles.

  Raises:
    ValueError: If the band-limits are invalid.
  """
  _check_band_limits(L, N)
  gammas = 2 * jnp.pi * jnp.arange(2 * N - 1) / (2 * N - 1)
  return mw_phis(L), mw_thetas(L), gammas


def flmn_size(
    L: int,
    N: int,
    storage: Storage = Config.storage,
    reality: bool = False,
) -> int:
  """Number of entries of a flattened Wigner coefficient vector.

  Args:
    L: Harmonic band-limit.
    N: Orientational band-limit.
    storage: Either ``'padded'`` or ``'compact'``.
    reality: Whether only the coefficients of a real signal are stored.

  Returns:
    The length of the coefficient vector.

  Raises:
    ValueError: If the band-limits or ``storage`` are invalid.
  """
  _check_band_limits(L, N)
  check_storage_is_valid(storage)
  if storage == 'padded':
    if reality:
      return N * L * L
    return (2 * N - 1) * L * L
  if reality:
    return N * (6 * L * L - (N - 1) * (2 * N - 1)) // 6
  return (2 * N - 1) * (3 * L * L - N * (N - 1)) // 3


def _orientations(N: int, order: Order, reality: bool) -> Iterator[int]:
  """Yields the orientational frequencies n in storage order."""
  if reality:
    yield from range(N)
  elif order == 'zero_first':
    yield from range(N)
    yield from range(-N + 1, 0)
  else:
    yield from range(-N + 1, N)


def _block_size(n: int, L: int, storage: Storage) -> int:
  if storage == 'padded':
    return L * L
  return L * L - n * n


def _block_offset(
    n: int, L: int, N: int, order: Order, storage: Storage, reality: bool
) -> int:
  """Offset of the first stored coefficient of the block belonging to n."""
  compact = storage == 'compact'
  if reality:
    return n * L * L - (_sum_of_squares(n - 1) if compact else 0)
  if order == 'zero_first':
    if n >= 0:
      return n * L * L - (_sum_of_squares(n - 1) if compact else 0)
    # All blocks n >= 0 followed by the blocks -N+1, ..., n-1.
    offset = (n + 2 * N - 1) * L * L
    if compact:
      offset -= _sum_of_squares(N - 1) + (
          _sum_of_squares(N - 1) - _sum_of_squares(-n)
      )
    return offset
  # Blocks -N+1, ..., n-1.
  offset = (n + N - 1) * L * L
  if compact:
    if n <= 0:
      offset -= _sum_of_squares(N - 1) - _sum_of_squares(-n)
    else:
      offset -= _sum_of_squares(N - 1) + _sum_of_squares(n - 1)
  return offset


def _check_layout(order: Order, storage: Storage) -> None:
  check_order_is_valid(order)
  check_storage_is_valid(storage)


def elmn2ind(
    l: int,
    m: int,
    n: int,
    L: int,
    N: int,
    order: Order = Config.order,
    storage: Storage = Config.storage,
    reality: bool = False,
) -> int:
  """Flat index of the Wigner coefficient with degree l and orders m, n.

  Example:
    >>> import mwx
    >>> mwx.so3.elmn2ind(1, 0, -1, L=2, N=2, order='neg_first')
    2
    >>> mwx.so3.elmn2ind(1, 0, -1, L=2, N=2, order='neg_first',
    ...                  storage='compact')
    1

  Args:
    l: Degree, must satisfy ``|n| <= l < L``.
    m: Order, must satisfy ``|m| <= l``.
    n: Orientational frequency, must satisfy ``|n| < N`` (and ``n >= 0`` if
      ``reality=True``).
    L: Harmonic band-limit.
    N: Orientational band-limit.
    order: Either ``'zero_first'`` or ``'neg_first'`` (ignored if
      ``reality=True``).
    storage: Either ``'padded'`` or ``'compact'``.
    reality: Whether the index refers to the storage of a real signal.

  Returns:
    The index of :math:`f^l_{mn}` in the flattened coefficient vector.

  Raises:
    ValueError: If any argument is out of range or invalid.
  """
  _check_band_limits(L, N)
  _check_layout(order, storage)
  if not (abs(n) <= l < L and abs(m) <= l and abs(n) < N):
    raise ValueError(
        f'require |n| <= l < L, |m| <= l and |n| < N, received l={l}, m={m},'
        f' n={n} with L={L}, N={N}'
    )
  if reality and n < 0:
    raise ValueError(f'n must be positive or zero if reality=True, received {n}')
  offset = _block_offset(n, L, N, order, storage, reality)
  ind = l * l + l + m
  if storage == 'compact':
    ind -= n * n
  return offset + ind


def ind2elmn(
    ind: int,
    L: int,
    N: int,
    order: Order = Config.order,
    storage: Storage = Config.storage,
    reality: bool = False,
) -> tuple[int, int, int]:
  """Degree and orders belonging to a flat Wigner coefficient index.

  For padded storage, indices of the zero padding map to degrees
  :math:`l<|n|`.

  Args:
    ind: Flat index.
    L: Harmonic band-limit.
    N: Orientational band-limit.
    order: Either ``'zero_first'`` or ``'neg_first'``.
    storage: Either ``'padded'`` or ``'compact'``.
    reality: Whether the index refers to the storage of a real signal.

  Returns:
    A tuple ``(l, m, n)``.

  Raises:
    ValueError: If ``ind`` is out of range or any argument is invalid.
  """
  size = flmn_size(L, N, storage, reality)
  check_order_is_valid(order)
  if not 0 <= ind < size:
    raise ValueError(f'ind must be in [0, {size}), received {ind}')
  for n in _orientations(N, order, reality):
    offset = _block_offset(n, L, N, order, storage, reality)
    if offset <= ind < offset + _block_size(n, L, storage):
      local = ind - offset + (n * n if storage == 'compact' else 0)
      l = math.isqrt(local)
      return l, local - l * l - l, n
  raise AssertionError('unreachable')  # Every valid index belongs to a block.


def _block_slice(
    n: int, L: int, N: int, order: Order, storage: Storage, reality: bool
) -> slice:
  """Slice of the coefficients with l >= |n| belonging to the block of n."""
  offset = _block_offset(n, L, N, order, storage, reality)
  if storage == 'padded':
    return slice(offset + n * n, offset + L * L)
  return slice(offset, offset + L * L - n * n)


def convert_storage(
    flmn: Complex[Array, 'size'],
    L: int,
    N: int,
    order: Order,
    storage: Storage,
    new_order: Order,
    new_storage: Storage,
) -> Complex[Array, 'new_size']:
  """Converts a Wigner coefficient vector between storage layouts.

  Coefficients with :math:`l\\geq|n|` are copied, padding entries of padded
  layouts are set to zero.

  Example:
    >>> import jax.numpy as jnp
    >>> import mwx
    >>> flmn = jnp.arange(12.0)  # L=2, N=2, padded.
    >>> mwx.so3.convert_storage(flmn, 2, 2, 'zero_first', 'padded',
    ...                         'zero_first', 'compact').shape
    (10,)

  Args:
    flmn: Flattened coefficients in the layout given by ``order`` and
      ``storage``.
    L: Harmonic band-limit.
    N: Orientational band-limit.
    order: Order of the input.
    storage: Storage of the input.
    new_order: Order of the output.
    new_storage: Storage of the output.

  Returns:
    The coefficients in the new layout.

  Raises:
    ValueError: If any argument is invalid or ``flmn`` has the wrong length.
  """
  _check_layout(order, storage)
  _check_layout(new_order, new_storage)
  flmn = jnp.asarray(flmn)
  _check_shape(flmn, (flmn_size(L, N, storage),), 'flmn')
  out = jnp.zeros(flmn_size(L, N, new_storage), dtype=flmn.dtype)
  for n in range(-N + 1, N):
    src = _block_slice(n, L, N, order, storage, False)
    dst = _block_slice(n, L, N, new_order, new_storage, False)
    out = out.at[dst].set(flmn[src])
  return out

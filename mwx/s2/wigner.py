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

r"""Recursions for Wigner-d matrices.

The Wigner-d matrix :math:`d^l_{mm'}(\beta)` of degree :math:`l` is computed
from the matrix of degree :math:`l-1`, so matrices for successive degrees are
obtained by advancing a recursion one degree at a time. The recursions are
exposed as generators, which makes it impossible to request degrees out of
order.

All matrices for a band-limit :math:`L` are embedded in arrays of shape
:math:`(2L-1)\times(2L-1)`. Row and column indices :math:`L-1+m` and
:math:`L-1+m'` hold :math:`d^l_{mm'}`, entries with :math:`|m|>l` or
:math:`|m'|>l` are zero. The convention is the one for which
:math:`d^1_{10}(\beta)=-\sin(\beta)/\sqrt{2}`.

Two methods are available:

* ``'risbo'``: Risbo's recursion, which steps through half-integer degrees
  and works for arbitrary angles :math:`\beta`.
* ``'trapani'``: the recursion of Trapani and Navaza, which is only defined
  for :math:`\beta=\pi/2`.

Both methods give identical results up to floating point rounding.
"""

import math
from typing import Iterator, Optional
import jaxtyping
import numpy as np

from .._options import check_dl_method_is_valid
from .._options import DlMethod
from ._common import _check_band_limit_is_positive

Array = jaxtyping.Array
Float = jaxtyping.Float


def _risbo_half_step(
    d: Float[Array, 'n n'], sin_half: float, cos_half: float
) -> Float[Array, 'n+1 n+1']:
  """Advances a Wigner-d matrix from degree j to degree j + 1/2."""
  n = d.shape[0]  # The new matrix corresponds to degree j = n/2.
  i = np.arange(n)[:, None]
  k = np.arange(n)[None, :]
  out = np.zeros((n + 1, n + 1), dtype=d.dtype)
  out[:-1, :-1] += np.sqrt((n - i) * (n - k)) / n * cos_half * d
  out[1:, :-1] -= np.sqrt((i + 1) * (n - k)) / n * sin_half * d
  out[:-1, 1:] += np.sqrt((n - i) * (k + 1)) / n * sin_half * d
  out[1:, 1:] += np.sqrt((i + 1) * (k + 1)) / n * cos_half * d
  return out


def _risbo_step(
    d: Float[Array, '2*l-1 2*l-1'], beta: float
) -> Float[Array, '2*l+1 2*l+1']:
  """Advances a Wigner-d matrix from degree l-1 to degree l (Risbo)."""
  sin_half = math.sin(beta / 2)
  cos_half = math.cos(beta / 2)
  d = _risbo_half_step(d, sin_half, cos_half)
  return _risbo_half_step(d, sin_half, cos_half)


def _trapani_step(
    d: Float[Array, '2*l-1 2*l-1'],
) -> Float[Array, '2*l+1 2*l+1']:
  """Advances a Wigner-d matrix at beta=pi/2 from degree l-1 to l (Trapani)."""
  l = (d.shape[0] + 1) // 2
  m = np.arange(-l, l + 1)
  out = np.zeros((2 * l + 1, 2 * l + 1), dtype=d.dtype)

  # Top row d^l_{l,m} from the top row of degree l-1, symmetric in m.
  top = np.zeros(2 * l + 1, dtype=d.dtype)
  top[l] = -math.sqrt((2 * l - 1) / (2 * l)) * d[-1, l - 1]
  mpos = np.arange(1, l + 1)
  top[l + mpos] = (
      np.sqrt(l * (2 * l - 1) / (2 * (l + mpos) * (l + mpos - 1)))
      * d[-1, l - 2 + mpos]
  )
  top[:l] = top[l + 1 :][::-1]
  out[2 * l] = top

  # Three-term recursion down to m'=0.
  for mp in range(l, 0, -1):
    row = 2 * m * out[l + mp]
    if mp < l:
      row -= math.sqrt((l - mp) * (l + mp + 1)) * out[l + mp + 1]
    out[l + mp - 1] = row / math.sqrt((l + mp) * (l - mp + 1))

  # Rows m'<0 from d^l_{-m',m}(pi/2) = (-1)^(l+m) d^l_{m',m}(pi/2).
  sign = np.where((l + m) % 2 == 0, 1.0, -1.0)
  out[:l] = sign * out[l + 1 :][::-1]
  return out


def _embed(block: Float[Array, 'n n'], L: int) -> Float[Array, '2*L-1 2*L-1']:
  """Embeds a (2l+1)x(2l+1) block centered in a (2L-1)x(2L-1) array."""
  l = (block.shape[0] - 1) // 2
  out = np.zeros((2 * L - 1, 2 * L - 1), dtype=block.dtype)
  out[L - 1 - l : L + l, L - 1 - l : L + l] = block
  return out


def _is_half_pi(beta: float) -> bool:
  return math.isclose(beta, math.pi / 2, rel_tol=0.0, abs_tol=1e-14)


def _wigner_d_blocks(
    L: int,
    beta: float,
    method: DlMethod,
    start: Optional[Float[Array, 'n n']] = None,
) -> Iterator[Float[Array, 'n n']]:
  """Yields unembedded Wigner-d blocks, optionally continuing from ``start``.

  If ``start`` is given, it must be the block of some degree l0 and the
  generator yields the blocks of degrees l0+1, ..., L-1.
  """
  if start is None:
    d = np.ones((1, 1), dtype=np.float64)
    yield d
  else:
    d = np.asarray(start, dtype=np.float64)
  for _ in range((d.shape[0] + 1) // 2, L):
    if method == 'risbo':
      d = _risbo_step(d, beta)
    else:
      d = _trapani_step(d)
    yield d


def wigner_d_recursion(
    L: int, beta: float, method: DlMethod = 'risbo'
) -> Iterator[Float[Array, '2*L-1 2*L-1']]:
  r"""Yields Wigner-d matrices :math:`d^l(\beta)` for :math:`l=0,\dots,L-1`.

  Each matrix is derived from the matrix of the previous degree, so the
  generator has to be consumed in order (which it enforces by construction).

  Example:
    >>> import math
    >>> import mwx
    >>> for l, dl in enumerate(mwx.s2.wigner_d_recursion(2, math.pi / 2)):
    ...   print(l, dl.shape)
    0 (3, 3)
    1 (3, 3)

  Args:
    L: Harmonic band-limit, the last yielded matrix has degree ``L-1``.
    beta: Rotation angle :math:`\beta` in radians.
    method: Recursion method, either ``'risbo'`` or ``'trapani'``.

  Yields:
    Arrays of shape :math:`(2L-1, 2L-1)` holding :math:`d^l_{mm'}(\beta)` at
    index :math:`(L-1+m, L-1+m')`.

  Raises:
    ValueError: If ``L`` is not positive, ``method`` is invalid, or
      ``method='trapani'`` and ``beta`` is not :math:`\pi/2`.
  """
  _check_band_limit_is_positive(L)
  check_dl_method_is_valid(method)
  if method == 'trapani' and not _is_half_pi(beta):
    raise ValueError(
        f"method='trapani' is only defined for beta=pi/2, received {beta=}"
    )
  for block in _wigner_d_blocks(L, beta, method):
    yield _embed(block, L)


def wigner_d(
    L: int, beta: float, method: DlMethod = 'risbo'
) -> Float[Array, 'L 2*L-1 2*L-1']:
  r"""Stacked Wigner-d matrices :math:`d^l(\beta)` for all :math:`l<L`.

  Args:
    L: Harmonic band-limit.
    beta: Rotation angle :math:`\beta` in radians.
    method: Recursion method, either ``'risbo'`` or ``'trapani'``.

  Returns:
    An array of shape :math:`(L, 2L-1, 2L-1)`, entry ``[l]`` is the matrix
    yielded by :func:`wigner_d_recursion` for degree ``l``.
  """
  return np.stack(list(wigner_d_recursion(L, beta, method)))

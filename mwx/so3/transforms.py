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

r"""Wigner transforms on the rotation group :math:`\mathrm{SO}(3)`.

A signal on :math:`\mathrm{SO}(3)` with harmonic band-limit :math:`L` and
orientational band-limit :math:`N` is expanded in Wigner D-functions

.. math::
  f(\alpha,\beta,\gamma) = \sum_{n=-N+1}^{N-1}\sum_{l=|n|}^{L-1}
  \sum_{m=-l}^{l} \frac{2l+1}{8\pi^2}\, f^l_{mn}\,
  e^{im\alpha}\, d^l_{mn}(\beta)\, e^{in\gamma}.

For fixed :math:`n`, the sum over :math:`l` and :math:`m` is a spin
:math:`-n` signal on the sphere (up to normalization and the sign
:math:`(-1)^n`), so both transforms reduce to one Fourier transform over
:math:`\gamma` and :math:`2N-1` spin spherical harmonic transforms.
"""

import math
from typing import Callable
from absl import logging
import jax
import jax.numpy as jnp
import jaxtyping
import numpy as np

from .._options import check_dl_method_is_valid
from .._options import check_n_mode_is_valid
from .._options import check_order_is_valid
from .._options import check_storage_is_valid
from .._options import DlMethod
from .._options import NMode
from .._options import Order
from .._options import Storage
from ..config import Config
from ..s2._common import _check_shape
from ..s2._common import _degrees
from ..s2._common import _orders
from ..s2._common import _sign
from ..s2._wigner_d_halfpi_lut import _wigner_d_halfpi
from ..s2.transforms import _forward
from ..s2.transforms import _inverse
from .sampling import _block_slice
from .sampling import _check_band_limits
from .sampling import flmn_size
from .sampling import mw_sample_shape

Array = jaxtyping.Array
Complex = jaxtyping.Complex
Float = jaxtyping.Float
Inexact = jaxtyping.Inexact


def _check_arguments(
    L: int,
    N: int,
    order: Order,
    storage: Storage,
    n_mode: NMode,
    dl_method: DlMethod,
) -> None:
  """Checks all configuration arguments before any work is done."""
  _check_band_limits(L, N)
  check_order_is_valid(order)
  check_storage_is_valid(storage)
  check_n_mode_is_valid(n_mode)
  check_dl_method_is_valid(dl_method)


def _n_is_computed(n: int, N: int, n_mode: NMode) -> bool:
  """Whether the orientational frequency n is computed for the given n_mode."""
  if n_mode == 'even':
    return n % 2 == 0
  elif n_mode == 'odd':
    return n % 2 == 1
  elif n_mode == 'maximum':
    return abs(n) == N - 1
  else:  # 'all'.
    return True


def _delta(L: int, dl_method: DlMethod) -> Float[Array, 'L 2*L-1 2*L-1']:
  with jax.ensure_compile_time_eval():
    return jnp.asarray(_wigner_d_halfpi(L, dl_method))


def _extract_flm(
    flmn: Complex[Array, 'size'],
    n: int,
    L: int,
    N: int,
    order: Order,
    storage: Storage,
    reality: bool,
) -> Complex[Array, 'L**2']:
  """Coefficients of orientation n as spherical harmonic coefficients."""
  dtype = jnp.result_type(flmn.dtype, jnp.complex64)
  flm = jnp.zeros(L * L, dtype=dtype)  # Zeros for l < |n|.
  block = _block_slice(n, L, N, order, storage, reality)
  return flm.at[n * n :].set(flmn[block])


def _conjugate_flm(
    flm: Complex[Array, 'L**2'], n: int, L: int
) -> Complex[Array, 'L**2']:
  """Coefficients of orientation -n of a real signal from those of n."""
  degrees = _degrees(L)
  reflected = 2 * (degrees * degrees + degrees) - np.arange(L * L)  # (l, -m).
  return _sign(_orders(L) + n) * jnp.conj(flm[reflected])


def _inverse_slices(
    flm_for_n: Callable[[int], Complex[Array, 'L**2']],
    L: int,
    N: int,
    n_mode: NMode,
    delta: Float[Array, 'L 2*L-1 2*L-1'],
    dtype: jnp.dtype,
) -> Complex[Array, '2*N-1 L 2*L-1']:
  """Synthesizes all orientation slices and transforms over gamma."""
  num_gamma = 2 * N - 1
  scale = np.sqrt((2 * _degrees(L) + 1) / (16 * math.pi**3))
  fn = jnp.zeros(mw_sample_shape(L, N), dtype=dtype)
  for n in range(-N + 1, N):
    if not _n_is_computed(n, N, n_mode):
      continue
    logging.debug('Computing inverse spin transform for n=%d.', n)
    fn_slice = _inverse(flm_for_n(n) * scale, L, -n, delta)
    if n % 2:
      fn_slice = -fn_slice
    # Slices are stored in the order n = 0, 1, ..., N-1, -N+1, ..., -1.
    fn = fn.at[n % num_gamma].set(fn_slice)
  return num_gamma * jnp.fft.ifft(fn, axis=0)


def _forward_slices(
    f: Inexact[Array, '2*N-1 L 2*L-1'], L: int, N: int
) -> Complex[Array, '2*N-1 L 2*L-1']:
  """Fourier coefficients over gamma, in the order 0, 1, ..., -1."""
  return jnp.fft.fft(f, axis=0) * (2 * math.pi / (2 * N - 1))


def _forward_flm(
    fn: Complex[Array, '2*N-1 L 2*L-1'],
    n: int,
    L: int,
    N: int,
    delta: Float[Array, 'L 2*L-1 2*L-1'],
) -> Complex[Array, 'L**2']:
  """Coefficients f^l_{mn} (as flat spherical harmonic vector) of slice n."""
  logging.debug('Computing forward spin transform for n=%d.', n)
  flm = _forward(fn[n % (2 * N - 1)], L, -n, delta)
  sign = -1 if n % 2 else 1
  return flm * (sign * np.sqrt(4 * math.pi / (2 * _degrees(L) + 1)))


def inverse(
    flmn: Complex[Array, 'size'],
    L: int,
    N: int,
    order: Order = Config.order,
    storage: Storage = Config.storage,
    n_mode: NMode = Config.n_mode,
    dl_method: DlMethod = Config.dl_method,
) -> Complex[Array, '2*N-1 L 2*L-1']:
  r"""Inverse Wigner transform to the MW grid on :math:`\mathrm{SO}(3)`.

  Example:
    >>> import jax.numpy as jnp
    >>> import mwx
    >>> flmn = jnp.zeros(mwx.so3.flmn_size(3, 2)).at[0].set(1.0)
    >>> mwx.so3.inverse(flmn, L=3, N=2).shape
    (3, 3, 5)

  Args:
    flmn: Flattened Wigner coefficients :math:`f^l_{mn}` in the layout given
      by ``order`` and ``storage``.
    L: Harmonic band-limit.
    N: Orientational band-limit, :math:`N\leq L`.
    order: Either ``'zero_first'`` or ``'neg_first'``.
    storage: Either ``'padded'`` or ``'compact'``.
    n_mode: Which orientational frequencies are synthesized: ``'all'``,
      ``'even'``, ``'odd'`` or ``'maximum'`` (only :math:`|n|=N-1`), all other
      frequencies are treated as zero.
    dl_method: Recursion used for the Wigner-d matrices at :math:`\pi/2`.

  Returns:
    The signal values of shape :math:`(2N-1, L, 2L-1)`
    (:math:`\gamma, \beta, \alpha`).

  Raises:
    ValueError: If any argument is invalid or ``flmn`` has the wrong length.
  """
  _check_arguments(L, N, order, storage, n_mode, dl_method)
  flmn = jnp.asarray(flmn)
  _check_shape(flmn, (flmn_size(L, N, storage),), 'flmn')
  logging.info(
      'Computing inverse transform using MW sampling with parameters'
      ' (L, N, reality) = (%d, %d, False), order=%s, storage=%s.',
      L,
      N,
      order,
      storage,
  )

  def flm_for_n(n: int) -> Complex[Array, 'L**2']:
    return _extract_flm(flmn, n, L, N, order, storage, False)

  f = _inverse_slices(
      flm_for_n,
      L,
      N,
      n_mode,
      _delta(L, dl_method),
      jnp.result_type(flmn.dtype, jnp.complex64),
  )
  logging.info('Inverse transform computed.')
  return f


def forward(
    f: Inexact[Array, '2*N-1 L 2*L-1'],
    L: int,
    N: int,
    order: Order = Config.order,
    storage: Storage = Config.storage,
    n_mode: NMode = Config.n_mode,
    dl_method: DlMethod = Config.dl_method,
) -> Complex[Array, 'size']:
  r"""Forward Wigner transform of an MW-sampled signal on :math:`\mathrm{SO}(3)`.

  Args:
    f: Signal values of shape :math:`(2N-1, L, 2L-1)`
      (:math:`\gamma, \beta, \alpha`).
    L: Harmonic band-limit.
    N: Orientational band-limit, :math:`N\leq L`.
    order: Either ``'zero_first'`` or ``'neg_first'``.
    storage: Either ``'padded'`` or ``'compact'``.
    n_mode: Which orientational frequencies are analyzed: ``'all'``,
      ``'even'``, ``'odd'`` or ``'maximum'`` (only :math:`|n|=N-1`), the
      coefficients of all other frequencies are zero.
    dl_method: Recursion used for the Wigner-d matrices at :math:`\pi/2`.

  Returns:
    Flattened Wigner coefficients :math:`f^l_{mn}` in the layout given by
    ``order`` and ``storage``.

  Raises:
    ValueError: If any argument is invalid or ``f`` has the wrong shape.
  """
  _check_arguments(L, N, order, storage, n_mode, dl_method)
  f = jnp.asarray(f)
  _check_shape(f, mw_sample_shape(L, N), 'f')
  if not jnp.iscomplexobj(f):
    logging.warning(
        'Running complex transform on real signal (use forward_real to'
        ' improve performance).'
    )
  logging.info(
      'Computing forward transform using MW sampling with parameters'
      ' (L, N, reality) = (%d, %d, False), order=%s, storage=%s.',
      L,
      N,
      order,
      storage,
  )
  delta = _delta(L, dl_method)
  fn = _forward_slices(f, L, N)
  flmn = jnp.zeros(flmn_size(L, N, storage), dtype=fn.dtype)
  for n in range(-N + 1, N):
    if not _n_is_computed(n, N, n_mode):
      continue
    flm = _forward_flm(fn, n, L, N, delta)
    block = _block_slice(n, L, N, order, storage, False)
    flmn = flmn.at[block].set(flm[n * n :])
  logging.info('Forward transform computed.')
  return flmn


def inverse_real(
    flmn: Complex[Array, 'size'],
    L: int,
    N: int,
    storage: Storage = Config.storage,
    n_mode: NMode = Config.n_mode,
    dl_method: DlMethod = Config.dl_method,
) -> Float[Array, '2*N-1 L 2*L-1']:
  r"""Inverse Wigner transform of a real signal.

  Only the coefficients with :math:`n\geq 0` are stored (in increasing order
  of :math:`n`), the remaining ones follow from
  :math:`f^l_{-m,-n}=(-1)^{m+n}\overline{f^l_{mn}}`.

  Args:
    flmn: Flattened Wigner coefficients :math:`f^l_{mn}` with :math:`n\geq0`.
    L: Harmonic band-limit.
    N: Orientational band-limit, :math:`N\leq L`.
    storage: Either ``'padded'`` or ``'compact'``.
    n_mode: Which orientational frequencies are synthesized: ``'all'``,
      ``'even'``, ``'odd'`` or ``'maximum'``.
    dl_method: Recursion used for the Wigner-d matrices at :math:`\pi/2`.

  Returns:
    The real signal values of shape :math:`(2N-1, L, 2L-1)`.

  Raises:
    ValueError: If any argument is invalid or ``flmn`` has the wrong length.
  """
  _check_arguments(L, N, Config.order, storage, n_mode, dl_method)
  flmn = jnp.asarray(flmn)
  _check_shape(flmn, (flmn_size(L, N, storage, reality=True),), 'flmn')
  logging.info(
      'Computing inverse transform using MW sampling with parameters'
      ' (L, N, reality) = (%d, %d, True), storage=%s.',
      L,
      N,
      storage,
  )

  def flm_for_n(n: int) -> Complex[Array, 'L**2']:
    flm = _extract_flm(flmn, abs(n), L, N, Config.order, storage, True)
    return flm if n >= 0 else _conjugate_flm(flm, -n, L)

  f = _inverse_slices(
      flm_for_n,
      L,
      N,
      n_mode,
      _delta(L, dl_method),
      jnp.result_type(flmn.dtype, jnp.complex64),
  )
  logging.info('Inverse transform computed.')
  return jnp.real(f)


def forward_real(
    f: Float[Array, '2*N-1 L 2*L-1'],
    L: int,
    N: int,
    storage: Storage = Config.storage,
    n_mode: NMode = Config.n_mode,
    dl_method: DlMethod = Config.dl_method,
) -> Complex[Array, 'size']:
  r"""Forward Wigner transform of a real signal.

  Args:
    f: Real signal values of shape :math:`(2N-1, L, 2L-1)`.
    L: Harmonic band-limit.
    N: Orientational band-limit, :math:`N\leq L`.
    storage: Either ``'padded'`` or ``'compact'``.
    n_mode: Which orientational frequencies are analyzed: ``'all'``,
      ``'even'``, ``'odd'`` or ``'maximum'``.
    dl_method: Recursion used for the Wigner-d matrices at :math:`\pi/2`.

  Returns:
    Flattened Wigner coefficients :math:`f^l_{mn}` with :math:`n\geq0`.

  Raises:
    ValueError: If any argument is invalid or ``f`` has the wrong shape.
  """
  _check_arguments(L, N, Config.order, storage, n_mode, dl_method)
  f = jnp.asarray(f)
  _check_shape(f, mw_sample_shape(L, N), 'f')
  if jnp.iscomplexobj(f):
    logging.warning(
        'Running real transform but input appears to be complex (ignoring'
        ' imaginary component).'
    )
    f = jnp.real(f)
  logging.info(
      'Computing forward transform using MW sampling with parameters'
      ' (L, N, reality) = (%d, %d, True), storage=%s.',
      L,
      N,
      storage,
  )
  delta = _delta(L, dl_method)
  fn = _forward_slices(f, L, N)
  flmn = jnp.zeros(flmn_size(L, N, storage, reality=True), dtype=fn.dtype)
  for n in range(N):
    if not _n_is_computed(n, N, n_mode):
      continue
    flm = _forward_flm(fn, n, L, N, delta)
    block = _block_slice(n, L, N, Config.order, storage, True)
    flmn = flmn.at[block].set(flm[n * n :])
  logging.info('Forward transform computed.')
  return flmn

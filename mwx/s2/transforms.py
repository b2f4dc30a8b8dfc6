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

r"""Spin spherical harmonic transforms for MW-sampled signals.

A spin-:math:`s` signal band-limited at :math:`L` is expanded as

.. math::
  f(\theta,\phi) = \sum_{l=|s|}^{L-1}\sum_{m=-l}^{l} f_{lm}\,
  {}_sY_{lm}(\theta,\phi), \qquad
  {}_sY_{lm}(\theta,\phi) = (-1)^s\sqrt{\frac{2l+1}{4\pi}}\,
  d^l_{m,-s}(\theta)\,e^{im\phi}.

The fast transforms factor the rotation :math:`d^l(\theta)` into two rotations
by :math:`\pi/2` and a rotation about the :math:`z`-axis,

.. math::
  d^l_{mn}(\theta) = i^{n-m}\sum_{m'=-l}^{l}\Delta^l_{m'm}\Delta^l_{m'n}
  e^{im'\theta}, \qquad \Delta^l = d^l(\pi/2),

which turns both directions into Fourier transforms plus a reduction over
degrees. The spin :math:`s` plays the role of the pole order when the
transforms are used as building blocks for transforms on
:math:`\mathrm{SO}(3)`.
"""

import math
import jax
import jax.numpy as jnp
import jaxtyping
import numpy as np

from .._options import check_dl_method_is_valid
from .._options import DlMethod
from ..config import Config
from ._common import _check_band_limit_is_positive
from ._common import _check_shape
from ._common import _check_spin_is_valid
from ._common import _degrees
from ._common import _orders
from ._common import _powers_of_i
from ._common import _sign
from ._common import _total_number_of_harmonics
from ._wigner_d_halfpi_lut import _wigner_d_halfpi
from .sampling import mw_sample_shape
from .sampling import mw_sampling
from .wigner import wigner_d_recursion

Array = jaxtyping.Array
Complex = jaxtyping.Complex
Float = jaxtyping.Float
Inexact = jaxtyping.Inexact
Integer = jaxtyping.Integer


def quadrature_weights(d: Integer[Array, '...']) -> Complex[Array, '...']:
  r"""Deconvolution kernel of the MW forward transform.

  Returns :math:`2\pi\,w(d)` with

  .. math::
    w(d) = \int_0^\pi e^{id\theta}\sin\theta\,d\theta = \begin{cases}
      i\pi d/2 & |d| = 1 \\
      2/(1-d^2) & d\ \mathrm{even} \\
      0 & \mathrm{otherwise}
    \end{cases}

  which integrates a Fourier series over the colatitude with the area element
  of the sphere.

  Example:
    >>> import jax.numpy as jnp
    >>> import mwx
    >>> w = mwx.s2.quadrature_weights(jnp.arange(-2, 3))
    >>> w.shape
    (5,)

  Args:
    d: Integer differences :math:`d=m''-m'` of Fourier orders.

  Returns:
    The weights :math:`2\pi\,w(d)`.
  """
  d = jnp.asarray(d)
  even = d % 2 == 0
  safe_denominator = jnp.where(even, 1 - d * d, 1)  # Make safe for division.
  w = jnp.where(even, 2 / safe_denominator, 0) + 0j
  w = jnp.where(jnp.abs(d) == 1, 1j * jnp.pi * d / 2, w)
  return 2 * jnp.pi * w


def _deconvolution_matrix(L: int) -> Complex[Array, '2*L-1 2*L-1']:
  """Matrix W[m'', m'] = quadrature_weights(m'' - m') for |m''|, |m'| < L."""
  m = jnp.arange(-(L - 1), L)
  return quadrature_weights(m[:, None] - m[None, :])


def _forward(
    f: Inexact[Array, 'L 2*L-1'],
    L: int,
    spin: int,
    delta: Float[Array, 'L 2*L-1 2*L-1'],
) -> Complex[Array, 'L**2']:
  """Forward transform by factoring of rotations (arguments are not checked)."""
  num = 2 * L - 1
  orders = np.arange(-(L - 1), L)

  # Azimuthal analysis, fm[m, t].
  fm = jnp.fft.fftshift(jnp.fft.fft(f, axis=1), axes=1).T / num

  # Extend to theta in (pi, 2pi) using f_m(2pi - theta) = (-1)^(m+s) f_m(theta).
  sign = _sign(orders + spin)[:, None]
  fm_ext = jnp.concatenate((fm, sign * fm[:, : L - 1][:, ::-1]), axis=1)

  # Fourier analysis over the extended colatitude, fmm[m, m'].
  fmm = jnp.fft.fftshift(jnp.fft.fft(fm_ext, axis=1), axes=1) / num
  fmm = fmm * jnp.exp(-1j * orders * jnp.pi / num)  # Offset of theta_0.

  # Deconvolution, gmm[m, m'].
  gmm = fmm @ _deconvolution_matrix(L)

  # Reduction over degrees with Delta^l_{m'm} Delta^l_{m',-s}.
  flm = jnp.einsum('lpm,lp,mp->lm', delta, delta[:, :, L - 1 - spin], gmm)
  degrees = np.arange(L)[:, None]
  factor = (
      _sign(spin)
      * _powers_of_i(orders + spin)[None, :]
      * np.sqrt((2 * degrees + 1) / (4 * np.pi))
  )
  flm = flm * factor
  return flm[_degrees(L), _orders(L) + L - 1]


def _inverse(
    flm: Complex[Array, 'L**2'],
    L: int,
    spin: int,
    delta: Float[Array, 'L 2*L-1 2*L-1'],
) -> Complex[Array, 'L 2*L-1']:
  """Separation-of-variables inverse transform (arguments are not checked)."""
  num = 2 * L - 1
  orders = np.arange(-(L - 1), L)
  degrees = np.arange(L)[:, None]

  # Scatter the flat coefficients to flm[l, m].
  dtype = jnp.result_type(flm.dtype, jnp.complex64)
  flm_dense = jnp.zeros((L, num), dtype=dtype)
  flm_dense = flm_dense.at[_degrees(L), _orders(L) + L - 1].set(flm)
  flm_dense = flm_dense * np.sqrt((2 * degrees + 1) / (4 * np.pi))

  # Fourier coefficients fmm[m, m'] of the signal on the extended torus.
  fmm = jnp.einsum('lm,lpm,lp->mp', flm_dense, delta, delta[:, :, L - 1 - spin])
  fmm = fmm * (_sign(spin) * _powers_of_i(-(orders + spin)))[:, None]

  # Synthesis over colatitude (keeping theta in (0, pi]), then longitude.
  fmm = fmm * jnp.exp(1j * orders * jnp.pi / num)  # Offset of theta_0.
  fmt = num * jnp.fft.ifft(jnp.fft.ifftshift(fmm, axes=1), axis=1)[:, :L]
  f = num * jnp.fft.ifft(jnp.fft.ifftshift(fmt, axes=0), axis=0)
  return f.T


def _check_arguments(L: int, spin: int, dl_method: DlMethod) -> None:
  _check_band_limit_is_positive(L)
  _check_spin_is_valid(spin, L)
  check_dl_method_is_valid(dl_method)


def forward(
    f: Inexact[Array, 'L 2*L-1'],
    L: int,
    spin: int = 0,
    dl_method: DlMethod = Config.dl_method,
) -> Complex[Array, 'L**2']:
  r"""Forward spin spherical harmonic transform of an MW-sampled signal.

  Computes the harmonic coefficients :math:`f_{lm}` of a signal band-limited at
  :math:`L` exactly (up to floating point rounding) from its values on the MW
  grid. The transform is computed by factoring of rotations: Fourier analysis
  over :math:`\phi`, extension of the colatitude to :math:`[0, 2\pi)`, Fourier
  analysis over :math:`\theta`, deconvolution with
  :func:`quadrature_weights`, and a reduction over degrees with Wigner-d
  matrices at :math:`\pi/2`.

  Example:
    >>> import jax.numpy as jnp
    >>> import mwx
    >>> flm = mwx.s2.forward(jnp.ones((1, 1)), L=1)
    >>> jnp.allclose(flm, jnp.sqrt(4 * jnp.pi))
    Array(True, dtype=bool)

  Args:
    f: Signal values of shape :math:`(L, 2L-1)` (colatitude, longitude).
    L: Harmonic band-limit.
    spin: Spin number :math:`s` of the signal, :math:`|s|<L`.
    dl_method: Recursion used for the Wigner-d matrices at :math:`\pi/2`.

  Returns:
    The flattened coefficients :math:`f_{lm}` (index :math:`l^2+l+m`),
    coefficients with :math:`l<|s|` are zero.

  Raises:
    ValueError: If ``L``, ``spin`` or ``dl_method`` are invalid, or ``f`` has
      the wrong shape.
  """
  _check_arguments(L, spin, dl_method)
  f = jnp.asarray(f)
  _check_shape(f, mw_sample_shape(L), 'f')
  with jax.ensure_compile_time_eval():
    delta = jnp.asarray(_wigner_d_halfpi(L, dl_method))
  return _forward(f, L, spin, delta)


def inverse(
    flm: Complex[Array, 'L**2'],
    L: int,
    spin: int = 0,
    dl_method: DlMethod = Config.dl_method,
) -> Complex[Array, 'L 2*L-1']:
  r"""Inverse spin spherical harmonic transform to the MW grid.

  Example:
    >>> import jax.numpy as jnp
    >>> import mwx
    >>> f = mwx.s2.inverse(jnp.asarray([1.0, 0.0, 0.0, 0.0]), L=2)
    >>> f.shape
    (2, 3)

  Args:
    flm: Flattened coefficients :math:`f_{lm}` of length :math:`L^2`.
    L: Harmonic band-limit.
    spin: Spin number :math:`s` of the signal, :math:`|s|<L`.
    dl_method: Recursion used for the Wigner-d matrices at :math:`\pi/2`.

  Returns:
    The signal values of shape :math:`(L, 2L-1)` (colatitude, longitude).

  Raises:
    ValueError: If ``L``, ``spin`` or ``dl_method`` are invalid, or ``flm`` has
      the wrong length.
  """
  _check_arguments(L, spin, dl_method)
  flm = jnp.asarray(flm)
  _check_shape(flm, (_total_number_of_harmonics(L),), 'flm')
  with jax.ensure_compile_time_eval():
    delta = jnp.asarray(_wigner_d_halfpi(L, dl_method))
  return _inverse(flm, L, spin, delta)


def inverse_direct(
    flm: Complex[Array, 'L**2'], L: int, spin: int = 0
) -> Complex[Array, 'L 2*L-1']:
  r"""Inverse transform by direct summation over all harmonics.

  For every grid point, the Wigner-d recursion is restarted at degree 0 and
  advanced up to degree :math:`L-1` with Risbo's method. This costs
  :math:`\mathcal{O}(L^5)` operations and is only meant as a reference for
  checking the fast transforms with small band-limits.

  Args:
    flm: Flattened coefficients :math:`f_{lm}` of length :math:`L^2`.
    L: Harmonic band-limit.
    spin: Spin number :math:`s` of the signal, :math:`|s|<L`.

  Returns:
    The signal values of shape :math:`(L, 2L-1)` (colatitude, longitude).

  Raises:
    ValueError: If ``L`` or ``spin`` are invalid, or ``flm`` has the wrong
      length.
  """
  _check_band_limit_is_positive(L)
  _check_spin_is_valid(spin, L)
  flm = np.asarray(flm)
  _check_shape(flm, (_total_number_of_harmonics(L),), 'flm')

  thetas, phis = (np.asarray(x, dtype=np.float64) for x in mw_sampling(L))
  f = np.zeros(mw_sample_shape(L), dtype=np.complex128)
  for t, theta in enumerate(thetas):
    for p, phi in enumerate(phis):
      for l, dl in enumerate(wigner_d_recursion(L, float(theta), 'risbo')):
        m = np.arange(-l, l + 1)
        f[t, p] += math.sqrt((2 * l + 1) / (4 * math.pi)) * np.sum(
            flm[l * l : (l + 1) * (l + 1)]
            * dl[L - 1 + m, L - 1 - spin]
            * np.exp(1j * m * phi)
        )
  return jnp.asarray(_sign(spin) * f)

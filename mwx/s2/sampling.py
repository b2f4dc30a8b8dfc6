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

r"""McEwen-Wiaux (MW) sampling of the sphere and harmonic index maps.

The MW sampling theorem represents a signal on the sphere that is band-limited
at :math:`L` (all harmonic coefficients with degree :math:`l\geq L` vanish)
exactly by its values on the equiangular grid

.. math::
  \theta_t = \frac{\pi(2t+1)}{2L-1},\quad t=0,\dots,L-1, \qquad
  \phi_p = \frac{2\pi p}{2L-1},\quad p=0,\dots,2L-2.

The last colatitude sample is the south pole :math:`\theta_{L-1}=\pi`.
"""

import math
import jax.numpy as jnp
import jaxtyping

from ._common import _check_band_limit_is_positive

Array = jaxtyping.Array
Float = jaxtyping.Float


def mw_sample_shape(L: int) -> tuple[int, int]:
  """Returns the shape ``(L, 2L-1)`` of an MW-sampled signal on the sphere.

  Args:
    L: Harmonic band-limit.

  Returns:
    The number of colatitude and longitude samples.

  Raises:
    ValueError: If ``L`` is not positive.
  """
  _check_band_limit_is_positive(L)
  return L, 2 * L - 1


def mw_thetas(L: int) -> Float[Array, 'L']:
  r"""Colatitudes :math:`\theta_t` of the MW grid."""
  _check_band_limit_is_positive(L)
  t = jnp.arange(L)
  return jnp.pi * (2 * t + 1) / (2 * L - 1)


def mw_phis(L: int) -> Float[Array, '2*L-1']:
  r"""Longitudes :math:`\phi_p` of the MW grid."""
  _check_band_limit_is_positive(L)
  p = jnp.arange(2 * L - 1)
  return 2 * jnp.pi * p / (2 * L - 1)


def mw_sampling(L: int) -> tuple[Float[Array, 'L'], Float[Array, '2*L-1']]:
  r"""Returns the colatitudes and longitudes of the MW grid.

  Example:
    >>> import mwx
    >>> thetas, phis = mwx.s2.mw_sampling(2)
    >>> thetas.shape, phis.shape
    ((2,), (3,))

  Args:
    L: Harmonic band-limit.

  Returns:
    A tuple of two arrays with the colatitudes :math:`\theta_t` and longitudes
    :math:`\phi_p`.

  Raises:
    ValueError: If ``L`` is not positive.
  """
  return mw_thetas(L), mw_phis(L)


def elm2ind(l: int, m: int) -> int:
  """Flat index of the harmonic coefficient with degree l and order m.

  Coefficients are stored in the order (0,0), (1,-1), (1,0), (1,1), (2,-2), ...

  Args:
    l: Degree.
    m: Order, must satisfy ``|m| <= l``.

  Returns:
    The index ``l**2 + l + m``.

  Raises:
    ValueError: If ``l`` is negative or ``|m| > l``.
  """
  if l < 0 or abs(m) > l:
    raise ValueError(f'require 0 <= |m| <= l, received l={l}, m={m}')
  return l * l + l + m


def ind2elm(ind: int) -> tuple[int, int]:
  """Degree and order belonging to a flat harmonic index.

  Args:
    ind: Non-negative flat index.

  Returns:
    A tuple ``(l, m)``.

  Raises:
    ValueError: If ``ind`` is negative.
  """
  if ind < 0:
    raise ValueError(f'ind must be positive or zero, received {ind}')
  l = math.isqrt(ind)
  return l, ind - l * l - l

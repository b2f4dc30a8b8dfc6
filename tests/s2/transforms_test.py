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

import functools
import math
import jax
import jax.numpy as jnp
import mwx
import numpy as np
import pytest

from ..testing import assert_allclose
from ..testing import random_flm
from ..testing import subtests


def test_quadrature_weights() -> None:
  d = jnp.arange(-6, 7)
  w = mwx.s2.quadrature_weights(d) / (2 * jnp.pi)
  expected = np.zeros(d.shape, dtype=np.complex128)
  for i, di in enumerate(np.asarray(d)):
    if abs(di) == 1:
      expected[i] = 1j * np.pi * di / 2
    elif di % 2 == 0:
      expected[i] = 2 / (1 - di * di)
  assert_allclose(w, expected, atol=1e-14)


def test_quadrature_weights_are_hermitian() -> None:
  d = jnp.arange(0, 20)
  w_pos = mwx.s2.quadrature_weights(d)
  w_neg = mwx.s2.quadrature_weights(-d)
  assert_allclose(w_neg, jnp.conj(w_pos), atol=1e-14)
  assert_allclose(w_neg.real, w_pos.real, atol=1e-14)
  # Imaginary parts are non-zero only for |d| = 1.
  assert jnp.all(w_pos.imag[2:] == 0)
  # Weights for odd |d| > 1 vanish.
  assert jnp.all(w_pos[3::2] == 0)


def test_forward_with_band_limit_one() -> None:
  flm = mwx.s2.forward(jnp.full((1, 1), 2.5), L=1)
  assert flm.shape == (1,)
  assert_allclose(flm, jnp.asarray([2.5 * math.sqrt(4 * math.pi)]))


def test_inverse_direct_with_band_limit_one() -> None:
  f = mwx.s2.inverse_direct(jnp.asarray([3.0 + 1.0j]), L=1)
  assert f.shape == (1, 1)
  assert_allclose(f, jnp.full((1, 1), (3.0 + 1.0j) / math.sqrt(4 * math.pi)))


def test_inverse_direct_of_known_harmonics() -> None:
  L = 3
  thetas, phis = mwx.s2.mw_sampling(L)
  theta = thetas[:, None]
  phi = phis[None, :]
  # Y_10 = sqrt(3/4pi) cos(theta).
  flm = jnp.zeros(L * L).at[mwx.s2.elm2ind(1, 0)].set(1.0)
  expected = math.sqrt(3 / (4 * math.pi)) * jnp.cos(theta) * jnp.ones_like(phi)
  assert_allclose(mwx.s2.inverse_direct(flm, L), expected)
  # Y_11 = -sqrt(3/8pi) sin(theta) exp(i phi).
  flm = jnp.zeros(L * L).at[mwx.s2.elm2ind(1, 1)].set(1.0)
  expected = -math.sqrt(3 / (8 * math.pi)) * jnp.sin(theta) * jnp.exp(1j * phi)
  assert_allclose(mwx.s2.inverse_direct(flm, L), expected)
  # Y_22 = sqrt(15/32pi) sin(theta)^2 exp(2i phi).
  flm = jnp.zeros(L * L).at[mwx.s2.elm2ind(2, 2)].set(1.0)
  expected = (
      math.sqrt(15 / (32 * math.pi))
      * jnp.sin(theta) ** 2
      * jnp.exp(2j * phi)
  )
  assert_allclose(mwx.s2.inverse_direct(flm, L), expected)


@subtests({
    'L=2, spin=0': dict(L=2, spin=0, seed=0),
    'L=5, spin=0': dict(L=5, spin=0, seed=1),
    'L=6, spin=0': dict(L=6, spin=0, seed=2),
    'L=5, spin=1': dict(L=5, spin=1, seed=3),
    'L=5, spin=-2': dict(L=5, spin=-2, seed=4),
    'L=4, spin=3': dict(L=4, spin=3, seed=5),
})
@pytest.mark.parametrize('dl_method', ['risbo', 'trapani'])
def test_forward_of_inverse_direct(
    L: int, spin: int, seed: int, dl_method: str
) -> None:
  flm = random_flm(jax.random.PRNGKey(seed), L, spin)
  f = mwx.s2.inverse_direct(flm, L, spin)
  assert_allclose(mwx.s2.forward(f, L, spin, dl_method), flm)


@subtests({
    'L=1': dict(L=1, spin=0, seed=0),
    'L=4, spin=0': dict(L=4, spin=0, seed=1),
    'L=5, spin=2': dict(L=5, spin=2, seed=2),
    'L=6, spin=-1': dict(L=6, spin=-1, seed=3),
})
def test_inverse_matches_inverse_direct(L: int, spin: int, seed: int) -> None:
  flm = random_flm(jax.random.PRNGKey(seed), L, spin)
  assert_allclose(
      mwx.s2.inverse(flm, L, spin), mwx.s2.inverse_direct(flm, L, spin)
  )


@pytest.mark.parametrize('L', [1, 2, 7, 16, 33])
@pytest.mark.parametrize('spin', [0, 1, -1])
def test_forward_of_inverse(L: int, spin: int) -> None:
  if abs(spin) >= L:
    pytest.skip('spin must be smaller than the band-limit')
  flm = random_flm(jax.random.PRNGKey(L), L, spin)
  f = mwx.s2.inverse(flm, L, spin)
  assert_allclose(mwx.s2.forward(f, L, spin), flm)


def test_inverse_of_forward_for_band_limited_signal() -> None:
  L = 8
  f = mwx.s2.inverse(random_flm(jax.random.PRNGKey(0), L), L)
  assert_allclose(mwx.s2.inverse(mwx.s2.forward(f, L), L), f)


def test_forward_of_real_signal_is_conjugate_symmetric() -> None:
  L = 6
  thetas, phis = mwx.s2.mw_sampling(L)
  f = jnp.cos(thetas)[:, None] * jnp.sin(phis)[None, :] + jnp.cos(
      3 * thetas
  )[:, None]
  flm = mwx.s2.forward(f, L)
  for l in range(L):
    for m in range(1, l + 1):
      assert_allclose(
          flm[mwx.s2.elm2ind(l, -m)],
          (-1) ** m * jnp.conj(flm[mwx.s2.elm2ind(l, m)]),
      )


def test_dl_methods_are_equivalent() -> None:
  L = 9
  key = jax.random.PRNGKey(7)
  f = mwx.s2.inverse(random_flm(key, L), L, dl_method='risbo')
  assert_allclose(
      mwx.s2.forward(f, L, dl_method='risbo'),
      mwx.s2.forward(f, L, dl_method='trapani'),
  )


def test_forward_and_inverse_under_jit() -> None:
  L = 5
  flm = random_flm(jax.random.PRNGKey(0), L)
  inverse = jax.jit(functools.partial(mwx.s2.inverse, L=L))
  forward = jax.jit(functools.partial(mwx.s2.forward, L=L))
  assert_allclose(forward(inverse(flm)), flm)


@subtests({
    'forward with wrong shape': dict(
        fn=lambda: mwx.s2.forward(jnp.zeros((3, 4)), L=3),
        message='f must have shape',
    ),
    'inverse with wrong length': dict(
        fn=lambda: mwx.s2.inverse(jnp.zeros(8), L=3),
        message='flm must have shape',
    ),
    'inverse_direct with wrong length': dict(
        fn=lambda: mwx.s2.inverse_direct(jnp.zeros(10), L=3),
        message='flm must have shape',
    ),
    'spin too large': dict(
        fn=lambda: mwx.s2.inverse(jnp.zeros(9), L=3, spin=3),
        message='spin must satisfy',
    ),
    'invalid band-limit': dict(
        fn=lambda: mwx.s2.forward(jnp.zeros((0, 0)), L=0),
        message='L must be a positive integer',
    ),
    'non-integer band-limit': dict(
        fn=lambda: mwx.s2.forward(jnp.ones((2, 3)), L=2.0),
        message='L must be a positive integer',
    ),
    'invalid dl_method': dict(
        fn=lambda: mwx.s2.forward(jnp.zeros((3, 5)), L=3, dl_method='foo'),
        message='dl_method must be in',
    ),
})
def test_transforms_raise_with_invalid_arguments(fn, message: str) -> None:
  with pytest.raises(ValueError, match=message):
    fn()

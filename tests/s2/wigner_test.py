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

import math
import mwx
import numpy as np
import pytest


def _d1(beta: float) -> np.ndarray:
  """Closed form of the Wigner-d matrix of degree 1 (rows m, columns m')."""
  c = math.cos(beta)
  s = math.sin(beta) / math.sqrt(2)
  return np.array([
      [(1 + c) / 2, s, (1 - c) / 2],
      [-s, c, s],
      [(1 - c) / 2, -s, (1 + c) / 2],
  ])


@pytest.mark.parametrize('beta', [0.0, 0.3, math.pi / 2, 2.5, math.pi])
def test_wigner_d_degree_one(beta: float) -> None:
  d = mwx.s2.wigner_d(2, beta)
  assert d.shape == (2, 3, 3)
  expected_d0 = np.zeros((3, 3))
  expected_d0[1, 1] = 1.0
  assert np.allclose(d[0], expected_d0, atol=1e-14)
  assert np.allclose(d[1], _d1(beta), atol=1e-14)


def test_wigner_d_embedding_for_larger_band_limit() -> None:
  d = mwx.s2.wigner_d(4, 0.7)
  assert d.shape == (4, 7, 7)
  assert np.allclose(d[1, 2:5, 2:5], _d1(0.7), atol=1e-14)
  # Entries outside the (2l+1)x(2l+1) block vanish.
  assert np.all(d[1, :2] == 0) and np.all(d[1, :, 5:] == 0)


@pytest.mark.parametrize('beta', [0.1, 1.2, 2.9])
def test_wigner_d_zero_orders_are_legendre_polynomials(beta: float) -> None:
  L = 10
  d = mwx.s2.wigner_d(L, beta)
  for l in range(L):
    coefficients = np.zeros(l + 1)
    coefficients[l] = 1.0
    expected = np.polynomial.legendre.legval(math.cos(beta), coefficients)
    assert np.isclose(d[l, L - 1, L - 1], expected, atol=1e-12)


@pytest.mark.parametrize('method', ['risbo', 'trapani'])
def test_wigner_d_is_orthogonal(method: str) -> None:
  L = 12
  d = mwx.s2.wigner_d(L, math.pi / 2, method)
  m = np.arange(-(L - 1), L)
  for l in range(L):
    projector = np.diag((np.abs(m) <= l).astype(np.float64))
    assert np.allclose(d[l] @ d[l].T, projector, atol=1e-12)


def test_wigner_d_risbo_and_trapani_agree_at_half_pi() -> None:
  L = 24
  risbo = mwx.s2.wigner_d(L, math.pi / 2, 'risbo')
  trapani = mwx.s2.wigner_d(L, math.pi / 2, 'trapani')
  assert np.allclose(risbo, trapani, atol=1e-12)


def test_wigner_d_factoring_of_rotations() -> None:
  L = 6
  theta = 0.9
  delta = mwx.s2.wigner_d(L, math.pi / 2)
  d = mwx.s2.wigner_d(L, theta)
  m = np.arange(-(L - 1), L)
  phase = 1j ** ((m[None, :] - m[:, None]) % 4)  # i^(n-m)
  for l in range(L):
    expected = phase * np.einsum(
        'pm,pn,p->mn', delta[l], delta[l], np.exp(1j * m * theta)
    )
    assert np.allclose(d[l], expected, atol=1e-12)


def test_wigner_d_recursion_yields_every_degree_in_order() -> None:
  L = 5
  matrices = list(mwx.s2.wigner_d_recursion(L, 0.4))
  assert len(matrices) == L
  for l, dl in enumerate(matrices):
    assert dl.shape == (2 * L - 1, 2 * L - 1)
    nonzero_rows = np.flatnonzero(np.any(dl != 0, axis=1))
    assert nonzero_rows.min() == L - 1 - l
    assert nonzero_rows.max() == L - 1 + l


def test_wigner_d_trapani_raises_away_from_half_pi() -> None:
  with pytest.raises(ValueError, match='only defined for beta=pi/2'):
    next(mwx.s2.wigner_d_recursion(3, 1.0, 'trapani'))


def test_wigner_d_raises_with_invalid_method() -> None:
  with pytest.raises(ValueError, match='dl_method must be in'):
    mwx.s2.wigner_d(3, 1.0, 'foo')


def test_wigner_d_raises_with_invalid_band_limit() -> None:
  with pytest.raises(ValueError, match='L must be a positive integer'):
    mwx.s2.wigner_d(0, 1.0)

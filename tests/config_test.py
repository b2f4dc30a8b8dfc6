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

from etils import epath
import mwx
import pytest


@pytest.fixture(name='restore_config')
def fixture_restore_config():
  saved = dict(
      dl_method=mwx.Config.dl_method,
      order=mwx.Config.order,
      storage=mwx.Config.storage,
      n_mode=mwx.Config.n_mode,
      wigner_d_halfpi_cache=mwx.Config.wigner_d_halfpi_cache,
  )
  yield
  for name, value in saved.items():
    setattr(mwx.Config, name, value)


@pytest.mark.usefixtures('restore_config')
@pytest.mark.parametrize(
    'setter, attribute, value',
    [
        ('set_dl_method', 'dl_method', 'risbo'),
        ('set_order', 'order', 'neg_first'),
        ('set_storage', 'storage', 'compact'),
        ('set_n_mode', 'n_mode', 'maximum'),
    ],
)
def test_config_setters(setter: str, attribute: str, value: str) -> None:
  getattr(mwx.Config, setter)(value)
  assert getattr(mwx.Config, attribute) == value


@pytest.mark.usefixtures('restore_config')
@pytest.mark.parametrize(
    'setter, message',
    [
        ('set_dl_method', 'dl_method must be in'),
        ('set_order', 'order must be in'),
        ('set_storage', 'storage must be in'),
        ('set_n_mode', 'n_mode must be in'),
    ],
)
def test_config_setters_raise_with_invalid_value(
    setter: str, message: str
) -> None:
  with pytest.raises(ValueError, match=message):
    getattr(mwx.Config, setter)('foo')


@pytest.mark.usefixtures('restore_config')
def test_config_set_wigner_d_halfpi_cache(tmp_path) -> None:
  mwx.Config.set_wigner_d_halfpi_cache(tmp_path / 'cache.npz')
  assert isinstance(mwx.Config.wigner_d_halfpi_cache, epath.Path)
  mwx.Config.set_wigner_d_halfpi_cache(None)
  assert mwx.Config.wigner_d_halfpi_cache is None

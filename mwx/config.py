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

"""Global configuration options for mwx."""

from typing import Optional
from etils import epath
from ._options import check_dl_method_is_valid
from ._options import check_n_mode_is_valid
from ._options import check_order_is_valid
from ._options import check_storage_is_valid
from ._options import DlMethod
from ._options import NMode
from ._options import Order
from ._options import Storage


class Config:
  """Static class for storing global configuration options for mwx.

  Attributes:
    dl_method: Which recursion is used by default for computing Wigner-d
      matrices at :math:`\\beta=\\pi/2`.
    order: Default ordering of the orientational frequencies :math:`n` in
      flattened :math:`\\mathrm{SO}(3)` coefficient vectors.
    storage: Whether :math:`\\mathrm{SO}(3)` coefficient vectors are padded
      with zeros for :math:`l<|n|` or stored compactly by default.
    n_mode: Which orientational frequencies :math:`n` are computed by default.
    wigner_d_halfpi_cache: Path to disk cache with Wigner-d matrices evaluated
      at :math:`\\beta=\\pi/2`.
  """

  dl_method: DlMethod = 'trapani'
  order: Order = 'zero_first'
  storage: Storage = 'padded'
  n_mode: NMode = 'all'
  wigner_d_halfpi_cache: Optional[epath.Path] = None

  @staticmethod
  def set_dl_method(dl_method: DlMethod = 'trapani') -> None:
    """Sets the value of Config.dl_method.

    Args:
      dl_method: New value for Config.dl_method.

    Raises:
      ValueError: If ``dl_method`` has an invalid value.
    """
    check_dl_method_is_valid(dl_method)
    Config.dl_method = dl_method

  @staticmethod
  def set_order(order: Order = 'zero_first') -> None:
    """Sets the value of Config.order.

    Args:
      order: New value for Config.order.

    Raises:
      ValueError: If ``order`` has an invalid value.
    """
    check_order_is_valid(order)
    Config.order = order

  @staticmethod
  def set_storage(storage: Storage = 'padded') -> None:
    """Sets the value of Config.storage.

    Args:
      storage: New value for Config.storage.

    Raises:
      ValueError: If ``storage`` has an invalid value.
    """
    check_storage_is_valid(storage)
    Config.storage = storage

  @staticmethod
  def set_n_mode(n_mode: NMode = 'all') -> None:
    """Sets the value of Config.n_mode.

    Args:
      n_mode: New value for Config.n_mode.

    Raises:
      ValueError: If ``n_mode`` has an invalid value.
    """
    check_n_mode_is_valid(n_mode)
    Config.n_mode = n_mode

  @staticmethod
  def set_wigner_d_halfpi_cache(path: Optional[epath.PathLike] = None) -> None:
    """Sets the value of Config.wigner_d_halfpi_cache.

    Args:
      path: Path to disk cache for saving/loading Wigner-d matrices evaluated
        at :math:`\\beta=\\pi/2`.
    """
    Config.wigner_d_halfpi_cache = (
        epath.Path(path) if path is not None else None
    )

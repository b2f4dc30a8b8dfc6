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

r"""Closed sets of options accepted by the transforms."""

from typing import Literal


valid_dl_methods = ('risbo', 'trapani')
valid_storages = ('padded', 'compact')
valid_orders = ('zero_first', 'neg_first')
valid_n_modes = ('all', 'even', 'odd', 'maximum')

DlMethod = Literal[valid_dl_methods]
Storage = Literal[valid_storages]
Order = Literal[valid_orders]
NMode = Literal[valid_n_modes]


def check_dl_method_is_valid(dl_method: DlMethod) -> None:
  """Checks whether dl_method has a valid value."""
  if dl_method not in valid_dl_methods:
    raise ValueError(
        f'dl_method must be in {valid_dl_methods}, received {dl_method!r}'
    )


def check_storage_is_valid(storage: Storage) -> None:
  """Checks whether storage has a valid value."""
  if storage not in valid_storages:
    raise ValueError(
        f'storage must be in {valid_storages}, received {storage!r}'
    )


def check_order_is_valid(order: Order) -> None:
  """Checks whether order has a valid value."""
  if order not in valid_orders:
    raise ValueError(f'order must be in {valid_orders}, received {order!r}')


def check_n_mode_is_valid(n_mode: NMode) -> None:
  """Checks whether n_mode has a valid value."""
  if n_mode not in valid_n_modes:
    raise ValueError(f'n_mode must be in {valid_n_modes}, received {n_mode!r}')

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

r"""Wigner transforms on the rotation group :math:`\mathrm{SO}(3)`."""


from .sampling import convert_storage
from .sampling import elmn2ind
from .sampling import flmn_size
from .sampling import ind2elmn
from .sampling import mw_grid_sizes
from .sampling import mw_sample_shape
from .sampling import mw_sampling
from .transforms import forward
from .transforms import forward_real
from .transforms import inverse
from .transforms import inverse_real

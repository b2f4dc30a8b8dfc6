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

r"""Harmonic transforms on the sphere :math:`S^2`."""


from .sampling import elm2ind
from .sampling import ind2elm
from .sampling import mw_phis
from .sampling import mw_sample_shape
from .sampling import mw_sampling
from .sampling import mw_thetas
from .transforms import forward
from .transforms import inverse
from .transforms import inverse_direct
from .transforms import quadrature_weights
from .wigner import wigner_d
from .wigner import wigner_d_recursion

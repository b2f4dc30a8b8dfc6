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

"""mwx API.

Exact harmonic transforms on the sphere (:obj:`s2 <mwx.s2>`) and on the
rotation group (:obj:`so3 <mwx.so3>`) for band-limited signals sampled on the
McEwen-Wiaux (MW) equiangular grid. All public functions of a submodule can be
used without specifying their full path, e.g. ``mwx.s2.forward`` is
equivalent to ``mwx.s2.transforms.forward``.
"""


from . import s2
from . import so3
from .config import Config
from .version import __version__

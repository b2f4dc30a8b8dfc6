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

"""Common utility code used to load, generate and save lookup tables."""

from typing import Any, Callable, Dict, IO, Optional, Tuple
import zipfile
from absl import logging
from etils import epath
import numpy as np


def _load_lookup_table_from_disk(
    lookup_table_name: str,
    config_cache_path: Optional[epath.Path],
    load_from_cache: Callable[[IO[bytes]], Tuple[int, Dict[str, Any]]],
    init_empty_lookup_table: Callable[[], Dict[str, Any]],
) -> Tuple[int, Dict[str, Any]]:
  """Load a lookup table from disk.

  Args:
    lookup_table_name: Name of the lookup table (used only for printing error
      messages).
    config_cache_path: Path to a cached file on disk, which can be specified
      using the Config class.
    load_from_cache: Function that reads the lookup table from a binary file
      handle and returns a tuple consisting of the stored maximum degree and
      the loaded lookup table.
    init_empty_lookup_table: Function that returns an empty version of the
      lookup table (in case no cached version can be loaded).

  Returns:
    A tuple consisting of an int with the stored maximum degree in the lookup
    table (-1 if nothing was loaded) and the loaded lookup table itself.
  """
  if config_cache_path is None or not config_cache_path.exists():
    return -1, init_empty_lookup_table()
  try:
    with config_cache_path.open('rb') as f:
      return load_from_cache(f)
  except (zipfile.BadZipFile, OSError, IOError, KeyError, ValueError):
    logging.exception(
        (
            "Failed to load %s lookup table from '%s' (data may be"
            ' corrupted). The lookup table will be re-generated.'
        ),
        lookup_table_name,
        config_cache_path,
    )
    return -1, init_empty_lookup_table()


def _print_cache_usage_information(
    lstart: int,
    max_degree: int,
    config_cache_path: Optional[epath.Path],
    set_cache_method_name: str,
    lookup_table_name: str,
) -> None:
  """Print information about the possibility to use disk caches.

  Args:
    lstart: Degree from which the generation of lookup table entries starts.
    max_degree: Maximum degree for which entries in the lookup table will be
      generated.
    config_cache_path: Path to a cached file on disk, which can be specified
      using the Config class.
    set_cache_method_name: Name of the method which can be used to enable disk
      caching for the given lookup table.
    lookup_table_name: Name of the lookup table.
  """
  if config_cache_path is None:
    logging.info(
        (
            'Generating %s lookup table with values for degrees up to'
            ' max_degree=%d (starting from degree=%d). The lookup table will'
            ' be re-generated on every call. To enable disk caching, call'
            " 'mwx.Config.%s(<path>)' at the start of your program."
        ),
        lookup_table_name,
        max_degree,
        lstart,
        set_cache_method_name,
    )
  else:
    logging.info(
        (
            'Generating %s lookup table with values for degrees up to '
            'max_degree=%d (starting from degree=%d).'
        ),
        lookup_table_name,
        max_degree,
        lstart,
    )


def _save_lookup_table_to_disk(
    lookup_table: Dict[str, Any],
    lookup_table_name: str,
    config_cache_path: Optional[epath.Path],
) -> None:
  """Save a lookup table to disk.

  Args:
    lookup_table: A dictionary containing the values that should be saved to
      disk.
    lookup_table_name: Name of the lookup table (used only for printing).
    config_cache_path: Path to the cache file on disk, which can be specified
      using the Config class.
  """
  if config_cache_path is None:
    return
  logging.info('Saving %s lookup table to disk.', lookup_table_name)
  try:
    with config_cache_path.open('wb') as f:
      np.savez_compressed(f, **lookup_table)
  except (OSError, IOError):
    logging.exception(
        "Failed to save %s lookup table to '%s'. Continuing anyway...",
        lookup_table_name,
        config_cache_path,
    )

# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Get values / settings from local configuration."""

import collections
import os

import yaml

from crashreporter._internal.base import errors
from crashreporter._internal.system import environment

YAML_FILE_EXTENSION = '.yaml'

SEPARATOR = '.'

CACHE_SIZE = 1024

CALLSTACKS_PATH = 'callstacks'


def _load_yaml_file(yaml_file_path):
  """Load yaml file and return parsed contents."""
  with open(yaml_file_path) as f:
    try:
      return yaml.safe_load(f.read())
    except yaml.YAMLError:
      raise errors.ConfigParseError(yaml_file_path)


def _search_key(config_dir, full_key_name):
  """Search a key of the form yaml_filename.key1.key2... in a config
  directory. Returns None when the file or the key does not exist."""
  key_parts = full_key_name.split(SEPARATOR)
  yaml_file_path = os.path.join(config_dir,
                                key_parts[0] + YAML_FILE_EXTENSION)
  if not os.path.isfile(yaml_file_path):
    return None

  result = _load_yaml_file(yaml_file_path)
  for search_key in key_parts[1:]:
    if not isinstance(result, dict):
      raise errors.InvalidConfigKey(full_key_name)

    if search_key not in result:
      return None

    result = result[search_key]

  return result


class Config(object):
  """Config class helper."""

  def __init__(self, root=None):
    self._root = root
    self._config_dir = environment.get_config_directory()
    self._cache = collections.OrderedDict()

    # Check that config directory is valid.
    if not self._config_dir or not os.path.isdir(self._config_dir):
      raise errors.BadConfigError(self._config_dir)

    # Config roots should exist.
    if self._root and _search_key(self._config_dir, self._root) is None:
      raise errors.BadConfigError(self._config_dir)

  def _put(self, key_name, value):
    """Cache a value, evicting the oldest one when full."""
    if len(self._cache) >= CACHE_SIZE:
      self._cache.popitem(last=False)

    self._cache[key_name] = value

  def get(self, key_name='', default=None):
    """Get key value using a key name."""
    if self._root:
      key_name = self._root + SEPARATOR + key_name if key_name else self._root

    if not key_name:
      raise errors.InvalidConfigKey(key_name)

    if key_name in self._cache:
      return self._cache[key_name]

    value = _search_key(self._config_dir, key_name)
    if value is None:
      return default

    self._put(key_name, value)
    return value


class CallstackConfig(Config):
  """Callstack parsing config."""

  def __init__(self):
    super().__init__(CALLSTACKS_PATH)

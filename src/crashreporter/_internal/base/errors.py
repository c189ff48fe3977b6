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
"""Functions for errors management."""


class Error(Exception):
  """Base exception class for errors."""


class BadConfigError(Error):
  """Error thrown when configuration is bad."""

  def __init__(self, config_dir):
    super().__init__(
        'Bad configuration at: {config_dir}'.format(config_dir=config_dir))


class ConfigParseError(Error):
  """Error thrown when we failed to parse a config yaml file."""

  def __init__(self, file_path):
    self.file_path = file_path
    super().__init__()

  def __str__(self):
    return 'Failed to parse config file %s.' % self.file_path


class InvalidConfigKey(Error):
  """Error thrown when a config key does not resolve to a valid location."""

  def __init__(self, key_name):
    self.key_name = key_name
    super().__init__()

  def __str__(self):
    return 'Invalid config key %s.' % self.key_name


class CallstackInputError(Error):
  """Error thrown when a callstack source cannot be read."""

  def __init__(self, source):
    self.source = source
    super().__init__()

  def __str__(self):
    return 'Unable to read callstack from %s.' % self.source

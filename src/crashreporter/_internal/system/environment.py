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
"""Environment functions."""

import ast
import os

# Directory holding the default YAML configuration shipped with the package.
_PACKAGE_DIRECTORY = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
LIB_CONFIG_DIRECTORY = os.path.join(_PACKAGE_DIRECTORY, 'lib-config')


def _eval_value(value_string):
  """Returns evaluated value."""
  try:
    return ast.literal_eval(value_string)
  except (ValueError, SyntaxError):
    # String fallback.
    return value_string


def get_value(environment_variable, default_value=None):
  """Return an environment variable value."""
  value_string = os.getenv(environment_variable)

  # value_string will be None if the variable is not defined.
  if value_string is None:
    return default_value

  # Evaluate the value of the environment variable with string fallback.
  return _eval_value(value_string)


def get_config_directory():
  """Return the path to the configs directory."""
  config_dir = get_value('CONFIG_DIR_OVERRIDE')
  if config_dir:
    return str(config_dir)

  return LIB_CONFIG_DIRECTORY

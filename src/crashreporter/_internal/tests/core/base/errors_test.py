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
"""Tests for errors."""

import unittest

from crashreporter._internal.base import errors


class ErrorMessageTest(unittest.TestCase):
  """Tests for error messages."""

  def test_bad_config(self):
    self.assertEqual('Bad configuration at: /config',
                     str(errors.BadConfigError('/config')))

  def test_config_parse(self):
    error = errors.ConfigParseError('/config/callstacks.yaml')
    self.assertEqual('/config/callstacks.yaml', error.file_path)
    self.assertEqual('Failed to parse config file /config/callstacks.yaml.',
                     str(error))

  def test_invalid_config_key(self):
    self.assertEqual('Invalid config key a.b.',
                     str(errors.InvalidConfigKey('a.b')))

  def test_callstack_input(self):
    error = errors.CallstackInputError('/crash.txt')
    self.assertIsInstance(error, errors.Error)
    self.assertEqual('Unable to read callstack from /crash.txt.', str(error))

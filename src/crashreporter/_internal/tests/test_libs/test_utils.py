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
"""Generic helper functions useful in tests."""

import os

from crashreporter._internal.system import environment


def set_up_pyfakefs(test_self, allow_root_user=True):
  """Helper to set up Pyfakefs with the bundled config directory readable."""
  config_dir = os.path.abspath(environment.get_config_directory())
  test_self.setUpPyfakefs(allow_root_user=allow_root_user)
  test_self.fs.add_real_directory(config_dir, lazy_read=False)

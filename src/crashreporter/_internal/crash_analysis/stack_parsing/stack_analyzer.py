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
"""Stack analyzer module."""

from crashreporter import callstacks
from crashreporter._internal.config import local_config


def _get_skip_markers(callstack_config):
  """Return the configured skip markers keyed by crash type."""
  skip_markers = callstack_config.get('skip_markers')
  if skip_markers is None:
    return dict(callstacks.SKIP_MARKERS)

  return {
      int(crash_type): str(marker)
      for crash_type, marker in skip_markers.items()
  }


def get_callstack(crash,
                  display_unformatted=False,
                  display_module_names=False,
                  display_function_names=False,
                  display_file_names=False,
                  display_file_path_names=False):
  """Parse the callstack of |crash| using the configured limits and markers,
  and set the requested display options on the result."""
  callstack_config = local_config.CallstackConfig()

  container = callstacks.CallstackContainer.from_crash(
      crash,
      max_frames_to_parse=int(
          callstack_config.get('max_frames_to_parse',
                               callstacks.MAX_FRAMES_TO_PARSE)),
      skip_markers=_get_skip_markers(callstack_config),
      core_runtime_module=callstack_config.get('core_runtime_module',
                                               callstacks.CORE_RUNTIME_MODULE),
      engine_core_module=callstack_config.get('engine_core_module',
                                              callstacks.ENGINE_CORE_MODULE))

  container.display_unformatted = display_unformatted
  container.display_module_names = display_module_names
  container.display_function_names = display_function_names
  container.display_file_names = display_file_names
  container.display_file_path_names = display_file_path_names
  return container

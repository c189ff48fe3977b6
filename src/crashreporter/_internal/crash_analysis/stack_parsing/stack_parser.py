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
"""Stack frame module."""

import ntpath

# Display value for a module or function that could not be determined.
UNKNOWN = '<Unknown>'

# Display value for a module in callstacks that never carry one.
UNKNOWN_MODULE = '<unknown module>'


class StackFrame(object):
  """One parsed line of a callstack.

  Module and function names that were not found in the line are stored as
  None and only turned into a display value by the |module| and |function|
  accessors.
  """

  def __init__(self,
               raw_line,
               module_name=None,
               file_path='',
               function_name=None,
               line_number=0,
               unknown_module=UNKNOWN):
    self._raw_line = raw_line
    self._module_name = module_name
    self._file_path = file_path or ''
    self._function_name = function_name
    self._line_number = line_number
    self._unknown_module = unknown_module

  @property
  def raw_line(self):
    return self._raw_line

  @property
  def module_name(self):
    """Parsed module name, or None if the line did not have one."""
    return self._module_name

  @property
  def has_module(self):
    return self._module_name is not None

  @property
  def module(self):
    """Module name for display."""
    if self._module_name is None:
      return self._unknown_module
    return self._module_name

  @property
  def function_name(self):
    """Parsed function name, or None if the line did not have one."""
    return self._function_name

  @property
  def function(self):
    """Function name for display."""
    if self._function_name is None:
      return UNKNOWN
    return self._function_name

  @property
  def file_path(self):
    return self._file_path

  @property
  def line_number(self):
    return self._line_number

  @property
  def file_name(self):
    """Last component of the file path followed by the line number."""
    if not self._file_path:
      return ''

    # ntpath splits on both '\\' and '/'.
    return '%s:%d' % (ntpath.basename(self._file_path), self._line_number)

  @property
  def file_path_with_line(self):
    if not self._file_path:
      return ''

    return '%s:%d' % (self._file_path, self._line_number)

  def get_trimmed_function_name(self, max_length):
    """Return at most the first |max_length| characters of the function."""
    return self.function[:max(max_length, 0)]

  def to_dict(self):
    """Return a JSON serializable view of the frame."""
    return {
        'raw_line': self._raw_line,
        'module': self.module,
        'function': self.function,
        'file_path': self._file_path,
        'line_number': self._line_number,
    }

  def _key(self):
    return (self._raw_line, self._module_name, self._file_path,
            self._function_name, self._line_number, self._unknown_module)

  def __eq__(self, other):
    if not isinstance(other, StackFrame):
      return NotImplemented

    return self._key() == other._key()  # pylint: disable=protected-access

  def __hash__(self):
    return hash(self._key())

  def __repr__(self):
    return 'StackFrame(%s)' % ', '.join(
        '%s=%r' % (key, value) for key, value in self.to_dict().items())

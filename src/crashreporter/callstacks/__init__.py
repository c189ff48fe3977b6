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
"""Callstack parsing module."""
from typing import NamedTuple
from typing import Optional

from crashreporter._internal.crash_analysis.stack_parsing import stack_parser
from crashreporter._internal.metrics import logs

from .constants import *


class CrashRecord(NamedTuple):
  """The fields of a crash report needed to parse its callstack."""
  id: Optional[int]
  raw_callstack: Optional[str]
  crash_type: int = CrashType.CRASH


def split_callstack_lines(raw_callstack):
  """Split a raw callstack into its non-empty lines."""
  if not raw_callstack:
    return []

  return [line for line in raw_callstack.split('\n') if line]


def detect_dialect(first_line):
  """Return the dialect a callstack is written in, judged by its first line."""
  lowered_line = first_line.lower()
  offset = 0
  for token in CURRENT_CALLSTACK_FORMAT_TOKENS:
    offset = lowered_line.find(token, offset)
    if offset == -1:
      return Dialect.LEGACY

    offset += len(token)

  return Dialect.CURRENT


def get_skip_marker(crash_type, skip_markers=None):
  """Return the marker to skip up to for |crash_type|, or None."""
  if skip_markers is None:
    skip_markers = SKIP_MARKERS

  return skip_markers.get(crash_type)


def _parse_int(value, default):
  """Parse a 32-bit integer, falling back to |default|."""
  value = value.strip()
  digits = value[1:] if value[:1] in ('+', '-') else value
  if not digits.isascii() or not digits.isdigit():
    return default

  result = int(value)
  if not MIN_LINE_NUMBER <= result <= MAX_LINE_NUMBER:
    return default

  return result


def _split_source_location(source_location, line):
  """Split "path:line" into the file path and line number."""
  file_path = source_location.rstrip(SOURCE_LINE_CHARACTERS)
  if len(file_path) >= len(source_location):
    # Nothing to strip, so there is no line number to read.
    logs.warning(
        'Malformed source location in callstack line.',
        source_location=source_location,
        line=line)
    return '', 0

  # Skip the separator between the path and the line number.
  line_number = _parse_int(source_location[len(file_path) + 1:], 0)
  return file_path, line_number


def parse_current_format_line(line):
  """Parse one line of a current format callstack. Always returns a frame,
  lines that do not look like a frame only carry the raw line."""
  module_name = None
  function_name = None
  file_path = ''
  line_number = 0

  module_separator_offset = line.find(MODULE_SEPARATOR)
  offset_separator_offset = line.find(OFFSET_SEPARATOR)
  bytes_offset = line.find(BYTES_MARKER)
  source_start_offset = line.find(SOURCE_START)
  source_end_offset = line.rfind(SOURCE_END)

  if module_separator_offset > 0:
    module_name = line[:module_separator_offset].strip()

    if bytes_offset > module_separator_offset:
      function_name = line[module_separator_offset + 1:bytes_offset +
                           len(BYTES_MARKER)].strip()

      if (source_start_offset > bytes_offset and
          source_end_offset > source_start_offset):
        source_location = line[source_start_offset + 1:
                               source_end_offset].strip()
        file_path, line_number = _split_source_location(source_location, line)

  elif bytes_offset > 0:
    # Module only, e.g. "KERNELBASE + 35 bytes".
    if offset_separator_offset == -1:
      module_name = line.strip()
    else:
      module_name = line[:offset_separator_offset].strip()

  return stack_parser.StackFrame(
      line,
      module_name=module_name,
      file_path=file_path,
      function_name=function_name,
      line_number=line_number)


def parse_legacy_format_line(line):
  """Parse one line of a legacy callstack. Returns None for lines that do not
  contain a function signature."""
  # A signature found anywhere is also found from the start of the line.
  match = LEGACY_CALLSTACK_LINE_REGEX.match(line)
  if not match or not match.group(0):
    return None

  function_name = match.group(1)
  file_path = ''
  line_number = -1

  # Every bracketed group after the function signature, last one wins.
  extra_info = line[match.end(1):match.end(0)]
  for group in BRACKETED_GROUP_REGEX.findall(extra_info):
    if not group.lower().startswith(LEGACY_FILE_START.lower()):
      continue

    # Drop the closing bracket.
    file_path = group[len(LEGACY_FILE_START):-1]
    line_number_string = ''
    line_number_separator = file_path.rfind(':')
    if line_number_separator != -1:
      line_number_string = file_path[line_number_separator + 1:]
      file_path = file_path[:line_number_separator]

    line_number = _parse_int(line_number_string, -1)

  return stack_parser.StackFrame(
      match.group(0),
      file_path=file_path,
      function_name=function_name,
      line_number=line_number,
      unknown_module=stack_parser.UNKNOWN_MODULE)


class CallstackContainer(object):
  """A parsed callstack and the options used to display it."""

  def __init__(self,
               raw_callstack,
               crash_type=CrashType.CRASH,
               crash_id=None,
               max_frames_to_parse=MAX_FRAMES_TO_PARSE,
               skip_markers=None,
               core_runtime_module=CORE_RUNTIME_MODULE,
               engine_core_module=ENGINE_CORE_MODULE):
    self.raw_callstack = raw_callstack or ''
    self.crash_type = crash_type
    self.crash_id = crash_id
    self.max_frames_to_parse = max_frames_to_parse
    self.skip_markers = SKIP_MARKERS if skip_markers is None else skip_markers
    self.core_runtime_module = core_runtime_module
    self.engine_core_module = engine_core_module

    # Everything is disabled by default.
    self.display_unformatted = False
    self.display_module_names = False
    self.display_function_names = False
    self.display_file_names = False
    self.display_file_path_names = False

    self._frames = ()
    self._dialect = None

    with logs.log_time('Parsing callstack', crash_id=crash_id):
      self._parse()

  @classmethod
  def from_crash(cls, crash, **kwargs):
    """Build a container from a CrashRecord."""
    return cls(
        crash.raw_callstack,
        crash_type=crash.crash_type,
        crash_id=crash.id,
        **kwargs)

  @property
  def frames(self):
    return self._frames

  @frames.setter
  def frames(self, frames):
    self._frames = tuple(frames)

  @property
  def dialect(self):
    """Dialect of the callstack, None when it was empty."""
    return self._dialect

  def _parse(self):
    """Parse the raw callstack into frames."""
    lines = split_callstack_lines(self.raw_callstack)
    if not lines:
      return

    self._dialect = detect_dialect(lines[0])
    if self._dialect == Dialect.LEGACY:
      self._frames = tuple(self._parse_legacy_lines(lines))
    else:
      self._frames = tuple(self._parse_current_lines(lines))

  def _parse_legacy_lines(self, lines):
    """Parse a callstack uploaded before the UE4 upgrade."""
    frames = []
    for line in lines:
      if len(frames) >= self.max_frames_to_parse:
        break

      frame = parse_legacy_format_line(line)
      if frame is not None:
        frames.append(frame)

    return frames

  def _parse_current_lines(self, lines):
    """Parse a current format callstack, skipping the frames of the assertion
    handler if the crash type has a marker."""
    frames = []
    skip_marker = get_skip_marker(self.crash_type, self.skip_markers)
    skipping = skip_marker is not None

    for line in lines:
      if len(frames) >= self.max_frames_to_parse:
        break

      if skipping:
        # The marker line is dropped too.
        if skip_marker in line:
          skipping = False
        continue

      frames.append(parse_current_format_line(line))

    return frames

  def get_module_name(self):
    """Find the module name that was most likely the source of the crash."""
    if not self._frames:
      return stack_parser.UNKNOWN

    first_frame = self._frames[0]
    if not _module_matches(first_frame, self.core_runtime_module):
      return first_frame.module

    # We asserted, so blame the first module outside of the engine core.
    for frame in self._frames[1:]:
      if not _module_matches(frame, self.engine_core_module):
        return frame.module

    return first_frame.module

  def get_formatted_callstack(self):
    """Format the callstack based on the display options."""
    if self.display_unformatted:
      return self.raw_callstack

    formatted_lines = []
    for frame in self._frames:
      formatted_line = ''
      if self.display_module_names:
        formatted_line += frame.module + MODULE_SEPARATOR

      if self.display_function_names:
        formatted_line += frame.function

      if frame.file_path:
        if self.display_file_path_names:
          formatted_line += ' --- ' + frame.file_path_with_line
        elif self.display_file_names:
          formatted_line += ' --- ' + frame.file_name

      formatted_lines.append(formatted_line + '\n')

    return ''.join(formatted_lines)


def _module_matches(frame, module_name):
  """Return whether the parsed module of |frame| is |module_name|, ignoring
  case. Frames without a parsed module never match."""
  return frame.has_module and frame.module_name.upper() == module_name.upper()

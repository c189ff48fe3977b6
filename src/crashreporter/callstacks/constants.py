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
"""Callstack parsing constants."""

import enum
import re

# Parsing stops once this many frames have been produced.
MAX_FRAMES_TO_PARSE = 128


class CrashType(enum.IntEnum):
  """Crash type codes that change how a callstack is parsed."""
  CRASH = 1
  ASSERT = 2
  ENSURE = 3


class Dialect(enum.Enum):
  """Textual layouts a callstack can be written in."""
  # Callstacks uploaded before the UE4 upgrade.
  LEGACY = 'legacy'
  CURRENT = 'current'


# Frames above these markers belong to the assertion handler itself.
ASSERT_FAILED_MARKER = 'FDebug::AssertFailed()'
ENSURE_FAILED_MARKER = 'FDebug::EnsureFailed()'

SKIP_MARKERS = {
    CrashType.ASSERT: ASSERT_FAILED_MARKER,
    CrashType.ENSURE: ENSURE_FAILED_MARKER,
}

# A callstack starting in this module comes from an assertion handler.
CORE_RUNTIME_MODULE = 'KERNELBASE'

# Module skipped while looking for the culprit of an assertion.
ENGINE_CORE_MODULE = 'UE4_CORE'

# Delimiters of a current format line, e.g.
# UE4_Engine!UEngine::Exec() + 21105 bytes [d:\...\unrealengine.cpp:2777]
MODULE_SEPARATOR = '!'
OFFSET_SEPARATOR = ' + '
BYTES_MARKER = ' bytes'
SOURCE_START = '['
SOURCE_END = ']'
SOURCE_LINE_CHARACTERS = '0123456789:'

# Legacy lines keep their source location in a "[File=path:line]" group.
LEGACY_FILE_START = '[File='

# A current format line holds these, in order, ignoring case.
CURRENT_CALLSTACK_FORMAT_TOKENS = ('()', 'bytes', '[', ']')

# Line numbers are 32-bit signed integers.
MAX_LINE_NUMBER = 2**31 - 1
MIN_LINE_NUMBER = -2**31

# Compiled regular expressions.
BRACKETED_GROUP_REGEX = re.compile(r'\[[^\]]*\]')
LEGACY_CALLSTACK_LINE_REGEX = re.compile(
    # Function signature up to its closing parenthesis (1).
    r'([^(]*[(][^)]*[)])'
    # Any number of trailing bracketed groups (2, 3).
    r'([^\[]*([\[][^\]]*[\]]))*',
    re.IGNORECASE | re.DOTALL)

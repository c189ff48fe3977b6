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
"""Callstack formatting module."""

import argparse
import json
import sys

from crashreporter import callstacks
from crashreporter._internal.base import errors
from crashreporter._internal.crash_analysis.stack_parsing import stack_analyzer
from crashreporter._internal.metrics import logs


def _read_callstack(path):
  """Read a raw callstack from |path|, or stdin for '-'."""
  if path == '-':
    return sys.stdin.read()

  try:
    with open(path, encoding='utf-8', errors='replace') as handle:
      return handle.read()
  except OSError as e:
    raise errors.CallstackInputError(path) from e


def _to_json(container):
  """Return the parsed callstack as a JSON string."""
  return json.dumps(
      {
          'dialect': container.dialect.value if container.dialect else None,
          'module': container.get_module_name(),
          'frames': [frame.to_dict() for frame in container.frames],
      },
      indent=2)


def main(argv=None):
  parser = argparse.ArgumentParser(description='Callstack formatting tool')
  parser.add_argument(
      '-i',
      '--input',
      help='Path to a raw callstack, - for stdin.',
      default='-')
  parser.add_argument(
      '-c',
      '--crash-type',
      help='Crash type code (2 for asserts, 3 for ensures).',
      type=int,
      default=int(callstacks.CrashType.CRASH))
  parser.add_argument(
      '--modules', help='Display module names.', action='store_true')
  parser.add_argument(
      '--functions', help='Display function names.', action='store_true')
  parser.add_argument(
      '--file-names', help='Display source file names.', action='store_true')
  parser.add_argument(
      '--file-paths', help='Display full source paths.', action='store_true')
  parser.add_argument(
      '--unformatted',
      help='Display the callstack as it was submitted.',
      action='store_true')
  parser.add_argument(
      '--json', help='Dump the parsed frames as JSON.', action='store_true')
  args = parser.parse_args(argv)

  logs.configure('format')

  try:
    raw_callstack = _read_callstack(args.input)
  except errors.CallstackInputError as e:
    logs.error(str(e))
    print(str(e), file=sys.stderr)
    return 1

  # Without any display option, show what a crash report page shows.
  if not (args.modules or args.functions or args.file_names or
          args.file_paths or args.unformatted):
    args.modules = args.functions = args.file_names = True

  crash = callstacks.CrashRecord(
      id=None, raw_callstack=raw_callstack, crash_type=args.crash_type)
  container = stack_analyzer.get_callstack(
      crash,
      display_unformatted=args.unformatted,
      display_module_names=args.modules,
      display_function_names=args.functions,
      display_file_names=args.file_names,
      display_file_path_names=args.file_paths)

  if args.json:
    print(_to_json(container))
  else:
    sys.stdout.write(container.get_formatted_callstack())

  return 0


if __name__ == '__main__':
  sys.exit(main())

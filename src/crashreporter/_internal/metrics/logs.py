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
"""Logging functions."""

import contextlib
import datetime
import json
import logging
from logging import config
import os
import sys
import time
import traceback
from typing import Any

# Messages longer than this are truncated in the middle before being emitted.
LOG_MESSAGE_LIMIT = 100000
LOCAL_LOG_LIMIT = 500000
_logger = None
_is_already_handling_uncaught = False
_default_extras = {}


def _console_logging_enabled():
  """Return bool on where console logging is enabled, usually for tests."""
  return bool(os.getenv('LOG_TO_CONSOLE'))


def _file_logging_enabled():
  """Return bool True when logging to files under LOG_DIR is enabled."""
  return bool(os.getenv('LOG_DIR'))


def set_logger(logger):
  """Set the logger."""
  global _logger
  _logger = logger


def get_handler_config(filename, backup_count):
  """Get handler config."""
  file_path = os.path.join(os.getenv('LOG_DIR'), filename)

  return {
      'class': 'logging.handlers.RotatingFileHandler',
      'level': logging.INFO,
      'formatter': 'json',
      'filename': file_path,
      'maxBytes': LOCAL_LOG_LIMIT,
      'backupCount': backup_count,
      'encoding': 'utf8',
  }


def get_logging_config_dict(name):
  """Get config dict for the logger `name`."""
  handlers = {}
  if _console_logging_enabled():
    handlers['console'] = {
        'class': 'logging.StreamHandler',
        'level': logging.INFO,
        'formatter': 'json',
        'stream': 'ext://sys.stderr',
    }
  if _file_logging_enabled():
    handlers['file'] = get_handler_config('%s.log' % name, 1)

  return {
      'version': 1,
      'disable_existing_loggers': False,
      'formatters': {
          'json': {
              '()': JsonFormatter,
          }
      },
      'handlers': handlers,
      'loggers': {
          name: {
              'handlers': list(handlers),
              'propagate': False,
          }
      },
  }


def truncate(msg, limit):
  """We need to truncate the message in the middle if it gets too long."""
  if not isinstance(msg, str) or len(msg) <= limit:
    return msg

  half = limit // 2
  return '\n'.join([
      msg[:half],
      '...%d characters truncated...' % (len(msg) - limit), msg[-half:]
  ])


class JsonFormatter(logging.Formatter):
  """Formats log records as JSON."""

  def format(self, record: logging.LogRecord) -> str:
    """Format LogEntry into JSON string."""
    entry = {
        'message':
            truncate(record.getMessage(), LOG_MESSAGE_LIMIT),
        'created': (datetime.datetime.fromtimestamp(
            record.created, tz=datetime.timezone.utc).isoformat()),
        'severity':
            record.levelname,
        'name':
            record.name,
        'pid':
            os.getpid(),
    }

    entry['location'] = getattr(record, 'location', {'error': True})
    entry['extras'] = {
        k: truncate(v, LOG_MESSAGE_LIMIT)
        for k, v in getattr(record, 'extras', {}).items()
    }
    update_entry_with_exc(entry, record.exc_info)

    if not entry['extras']:
      del entry['extras']

    return json.dumps(entry, default=_handle_unserializable)


def _handle_unserializable(unserializable: Any) -> str:
  try:
    return str(unserializable, 'utf-8')
  except TypeError:
    return str(unserializable)


def update_entry_with_exc(entry, exc_info):
  """Update the dict `entry` with exc_info."""
  if not exc_info or not exc_info[0]:
    return

  error_extras = getattr(exc_info[1], 'extras', {})
  entry.setdefault('extras', {}).update(error_extras)

  formatted_exception = ''.join(
      traceback.format_exception(exc_info[0], exc_info[1], exc_info[2]))
  entry['message'] += '\n' + truncate(formatted_exception, LOG_MESSAGE_LIMIT)


def uncaught_exception_handler(exception_type, exception_value,
                               exception_traceback):
  """Handles any exception that are uncaught by logging an error and calling
  the sys.__excepthook__."""
  global _is_already_handling_uncaught
  if _is_already_handling_uncaught:
    raise RuntimeError('Loop in uncaught_exception_handler')
  _is_already_handling_uncaught = True

  emit(
      logging.ERROR,
      'Uncaught exception',
      exc_info=(exception_type, exception_value, exception_traceback))

  sys.__excepthook__(exception_type, exception_value, exception_traceback)


def configure(name, extras=None):
  """Set logger. |extras| will be included by emit() in log messages.
  Also configures the process to log any uncaught exceptions as an error."""
  config.dictConfig(get_logging_config_dict(name))
  logger = logging.getLogger(name)
  logger.setLevel(logging.INFO)
  set_logger(logger)

  # Set _default_extras so they can be used later.
  if extras is None:
    extras = {}
  global _default_extras
  _default_extras = extras

  sys.excepthook = uncaught_exception_handler


def get_logger():
  """Return logger. We need this method because we need to mock logger."""
  if _logger:
    return _logger

  if _console_logging_enabled():
    # Force a logger when console logging is enabled.
    configure('crashreporter')

  return _logger


def get_source_location():
  """Return the caller file, lineno, and funcName."""
  frame = sys._getframe(1)  # pylint: disable=protected-access
  while frame and hasattr(frame, 'f_code'):
    if not frame.f_code.co_filename.endswith('logs.py'):
      return frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name
    frame = frame.f_back

  return 'Unknown', '-1', 'Unknown'


def emit(level, message, exc_info=None, **extras):
  """Log in JSON."""
  logger = get_logger()
  if not logger:
    return

  # Include extras passed as an argument and default extras.
  all_extras = _default_extras.copy()
  all_extras.update(extras)

  path_name, line_number, method_name = get_source_location()

  # Extra fields are wrapped under the attribute 'extras' so that they do not
  # collide with LogRecord attributes.
  logger.log(
      level,
      truncate(message, LOG_MESSAGE_LIMIT),
      exc_info=exc_info,
      extra={
          'extras': all_extras,
          'location': {
              'path': path_name,
              'line': line_number,
              'method': method_name
          }
      })


def info(message, **extras):
  """Logs the message to a given log file."""
  emit(logging.INFO, message, **extras)


def warning(message, **extras):
  """Logs the warning message."""
  emit(logging.WARN, message, exc_info=sys.exc_info(), **extras)


def error(message, **extras):
  """Logs the error in the error log file."""
  exception = extras.pop('exception', None)
  if exception:
    try:
      raise exception
    except Exception:
      emit(logging.ERROR, message, exc_info=sys.exc_info(), **extras)
  else:
    emit(logging.ERROR, message, exc_info=sys.exc_info(), **extras)


@contextlib.contextmanager
def log_time(name, **extras):
  """Log how long the wrapped block took to run."""
  start_time = time.time()
  try:
    yield
  finally:
    duration = time.time() - start_time
    info(
        '%s took %.3f seconds.' % (name, duration),
        duration=duration,
        **extras)

# -*- coding: utf-8 -*- #
# Copyright 2016 Google Inc. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging for cloudbind.

Everything the package logs goes through the 'cloudbind' logger. One stderr
handler is attached to it, filtered at the active verbosity. The verbosity
comes from SetVerbosity() or else the core/verbosity property
(CLOUDBIND_VERBOSITY), and is warning by default. Applications that configure
logging themselves still receive the records through propagation.
"""

import logging
import os
import sys

from cloudbind.core import properties

DEFAULT_VERBOSITY = logging.WARNING

VALID_VERBOSITY_STRINGS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
    'none': logging.CRITICAL + 10,
}


class _ConsoleFormatter(logging.Formatter):
  """Prefixes records with their level, colored when writing to a terminal."""

  LEVEL = '%(levelname)s:'
  MESSAGE = ' %(message)s'
  DEFAULT_FORMAT = LEVEL + MESSAGE

  RED = '\033[1;31m'
  YELLOW = '\033[1;33m'
  END = '\033[0m'

  COLOR_FORMATS = {
      logging.WARNING: YELLOW + LEVEL + END + MESSAGE,
      logging.ERROR: RED + LEVEL + END + MESSAGE,
      logging.CRITICAL: RED + LEVEL + MESSAGE + END,
  }

  def __init__(self, out_stream):
    super(_ConsoleFormatter, self).__init__()
    isatty = getattr(out_stream, 'isatty', None)
    self._use_color = bool(isatty and isatty()) and os.name != 'nt'

  def format(self, record):
    fmt = _ConsoleFormatter.DEFAULT_FORMAT
    if self._use_color:
      fmt = _ConsoleFormatter.COLOR_FORMATS.get(record.levelno, fmt)
    self._style._fmt = fmt  # pylint: disable=protected-access
    return logging.Formatter.format(self, record)


class _LogManager(object):
  """Owns the stderr handler of the cloudbind logger and its verbosity."""

  def __init__(self):
    self.logger = logging.getLogger('cloudbind')
    # The handler does the filtering.
    self.logger.setLevel(logging.DEBUG)
    self.stderr_handler = None
    self.verbosity = None
    self.Reset(sys.stderr)

  def Reset(self, stderr):
    """Replaces the handler with a new one on stderr and reloads verbosity."""
    if self.stderr_handler is not None:
      self.logger.removeHandler(self.stderr_handler)
    self.stderr_handler = logging.StreamHandler(stderr)
    self.stderr_handler.setFormatter(_ConsoleFormatter(stderr))
    self.logger.addHandler(self.stderr_handler)
    self.verbosity = None
    self.SetVerbosity(None)

  def SetVerbosity(self, verbosity):
    """Sets the level of the stderr handler.

    Args:
      verbosity: int, A logging level. If None, the core/verbosity property
        is used, or DEFAULT_VERBOSITY if it is not set.

    Returns:
      int, The previous verbosity.
    """
    if verbosity is None:
      name = properties.VALUES.core.verbosity.Get(validate=False)
      if name is not None:
        verbosity = VALID_VERBOSITY_STRINGS.get(name.lower())
    if verbosity is None:
      verbosity = DEFAULT_VERBOSITY

    old_verbosity = self.verbosity
    self.stderr_handler.setLevel(verbosity)
    self.verbosity = verbosity
    return old_verbosity


_log_manager = _LogManager()

logger = _log_manager.logger


def Reset(stderr=None):
  """Reinitializes the stderr handler, mainly to isolate tests.

  Args:
    stderr: The file-like object to log to. sys.stderr if not given.
  """
  _log_manager.Reset(stderr or sys.stderr)


def SetVerbosity(verbosity):
  """Sets the active verbosity, see _LogManager.SetVerbosity."""
  return _log_manager.SetVerbosity(verbosity)


def GetVerbosity():
  return _log_manager.verbosity


debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error

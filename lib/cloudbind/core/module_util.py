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

"""Utilities for accessing modules by installation independent paths."""

import importlib

from cloudbind.core import exceptions


class Error(exceptions.Error):
  """Exceptions for this module."""


class ImportModuleError(Error):
  """ImportModule failed."""


def ImportModule(module_path):
  """Imports a module attribute given its dotted path and returns it.

  The path is relative to the cloudbind package, for example
  'translate.api.Api'. Fully qualified paths starting with 'cloudbind.' are
  accepted as well.

  Args:
    module_path: str, The dotted path of the attribute to import.

  Raises:
    ImportModuleError: Any failure to import.

  Returns:
    The object named by module_path.
  """
  module_parts = module_path.split('.')
  attribute_name = module_parts.pop()
  if module_parts and module_parts[0] != 'cloudbind':
    module_parts.insert(0, 'cloudbind')
  package_name = '.'.join(module_parts)
  try:
    module_package = importlib.import_module(package_name)
  except ImportError:
    raise ImportModuleError('Package [{}] not found.'.format(package_name))
  try:
    return getattr(module_package, attribute_name)
  except AttributeError:
    raise ImportModuleError('Module [{}] not found in package [{}].'.format(
        attribute_name, package_name))

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

"""Library for building service clients from resolved configuration."""

from cloudbind.core import apis_map
from cloudbind.core import exceptions
from cloudbind.core import log
from cloudbind.core import module_util
from cloudbind.core import properties
from cloudbind.core import resolvers


class UnknownAPIError(exceptions.Error):
  """Unable to find API in APIs map."""

  def __init__(self, api_name):
    super(UnknownAPIError, self).__init__(
        'API named [{0}] does not exist in the APIs map'.format(api_name))


def _GetApiDef(api_name):
  """Returns the APIDef for the specified API.

  Args:
    api_name: str, The API name.

  Raises:
    UnknownAPIError: If api_name does not exist in the APIs map.

  Returns:
    APIDef, The APIDef for the specified API.
  """
  try:
    return apis_map.MAP[api_name]
  except KeyError:
    raise UnknownAPIError(api_name)


def GetServiceClass(api_name):
  return module_util.ImportModule(_GetApiDef(api_name).service_classpath)


def GetFacadeClass(api_name):
  return module_util.ImportModule(_GetApiDef(api_name).facade_classpath)


def GetResolver(api_name):
  """Returns the CredentialResolver for the specified API.

  Args:
    api_name: str, The API name.

  Returns:
    resolvers.CredentialResolver, A resolver reading the API's properties.
  """
  api_def = _GetApiDef(api_name)
  return resolvers.CredentialResolver(
      properties.VALUES.Section(api_def.section),
      default_scopes=api_def.default_scopes)


def Build(api_name, resolved):
  """Builds the facade of an API from a resolved configuration.

  Construction performs no I/O. retries and timeout are handed to the
  transport unchanged.

  Args:
    api_name: str, The API name.
    resolved: resolvers.ResolvedConfig, The configuration to build from.

  Returns:
    The facade object of the API wrapping a new transport Service.
  """
  service_class = GetServiceClass(api_name)
  facade_class = GetFacadeClass(api_name)
  service = service_class(
      resolved.project, resolved.credentials, key=resolved.key,
      retries=resolved.retries, timeout=resolved.timeout)
  log.debug('Built [%s] client for project [%s].', api_name, resolved.project)
  return facade_class(service)


def NewClient(api_name, key=None, project=None, keyfile=None, scope=None,
              retries=None, timeout=None):
  """Resolves the configuration of an API and builds its facade.

  Args:
    api_name: str, The API name.
    key: str, An API key, for APIs that accept one.
    project: str, The project id.
    keyfile: A keyfile path, keyfile JSON text or dict, or a google-auth
      credentials object.
    scope: str | [str], The OAuth scopes to request.
    retries: int, Number of times to retry a failed request.
    timeout: float, Request timeout in seconds.

  Raises:
    ConfigurationError: If the project cannot be determined.
    CredentialError: If the credentials cannot be loaded.

  Returns:
    The facade object of the API.
  """
  resolved = GetResolver(api_name).Resolve(
      key=key, project=project, keyfile=keyfile, scope=scope,
      retries=retries, timeout=timeout)
  return Build(api_name, resolved)

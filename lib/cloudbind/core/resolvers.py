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

"""Resolvers for the project and credentials of a service client.

Every service resolves its configuration the same way: an explicit argument
wins over an environment variable, which wins over the ambient environment
(the metadata server or application default credentials).
"""

import collections

from cloudbind.core import exceptions
from cloudbind.core import log
from cloudbind.core import properties
from cloudbind.core.credentials import creds


class Error(exceptions.ConfigurationError):
  """Errors for this module."""


class MissingProjectError(Error):

  def __init__(self):
    super(MissingProjectError, self).__init__('project is missing')


class ResolvedConfig(
    collections.namedtuple('ResolvedConfig',
                           ['project', 'credentials', 'key', 'scope',
                            'retries', 'timeout'])):
  """The settings a service client is constructed from.

  A ResolvedConfig is immutable and owned by the client built from it.

  Attributes:
    project: str, The project id. Never empty unless an API key is used.
    credentials: google.auth.credentials.Credentials, None when an API key is
      used.
    key: str, The API key, or None.
    scope: [str], The scopes requested by the caller, or None for the service
      defaults.
    retries: int, Passed through to the transport, or None for its default.
    timeout: float, Passed through to the transport, or None for its default.
  """

  def __new__(cls, project, credentials=None, key=None, scope=None,
              retries=None, timeout=None):
    return super(ResolvedConfig, cls).__new__(
        cls, project, credentials, key, scope, retries, timeout)


def _Explicit(value):
  """Returns value as a string, or None if it is absent or empty."""
  if value is None:
    return None
  value = properties.Stringize(value)
  return value or None


class CredentialResolver(object):
  """Resolves the project and credentials of one service.

  Attributes:
    section: properties._SectionService, The properties of the service.
    default_scopes: [str], The scopes the service uses when none are given.
  """

  def __init__(self, section, default_scopes=None):
    self.section = section
    self.default_scopes = default_scopes

  @property
  def allows_key(self):
    return self.section.HasProperty('key')

  def Resolve(self, key=None, project=None, keyfile=None, scope=None,
              retries=None, timeout=None):
    """Resolves the configuration of a client.

    Args:
      key: str, An API key. Only services that accept keys look at it.
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
      ResolvedConfig, The resolved configuration.
    """
    scope = creds.ScopeList(scope)
    key_source = self.KeySource(key)
    if key_source is not None:
      log.debug('Using an API key for [%s].', self.section.name)
      return ResolvedConfig(_Explicit(project) or '', key=key_source.value,
                            scope=scope, retries=retries, timeout=timeout)

    project = self.ResolveProject(project)
    source = self.CredentialSource(keyfile)
    log.debug('Resolved project [%s] for [%s] with [%s] credentials.',
              project, self.section.name, source.kind.value)
    credentials = creds.Load(source, scopes=scope,
                             default_scopes=self.default_scopes)
    return ResolvedConfig(project, credentials=credentials, scope=scope,
                          retries=retries, timeout=timeout)

  def ResolveKey(self, key=None):
    """Returns the explicit key, else the key from the environment, or None."""
    return _Explicit(key) or self.section.key.Get()

  def KeySource(self, key=None):
    """Returns an EXPLICIT_KEY source if the service uses a key, else None."""
    if not self.allows_key:
      return None
    key = self.ResolveKey(key)
    if not key:
      return None
    return creds.CredentialSource.FromKey(key)

  def ResolveProject(self, project=None):
    """Returns the explicit project, else the one from the environment.

    Args:
      project: str, The explicit project id, if any.

    Raises:
      MissingProjectError: If no project can be found.
      properties.InvalidProjectError: If the project id is not valid.

    Returns:
      str, The project id.
    """
    project = _Explicit(project)
    if project is not None:
      self.section.project.Validate(project)
      return project
    project = self.section.project.Get()
    if not project:
      raise MissingProjectError()
    return project

  def CredentialSource(self, keyfile=None):
    """Decides where the credentials come from.

    Args:
      keyfile: The explicit keyfile argument, if any.

    Returns:
      creds.CredentialSource, The source to load credentials from.
    """
    if keyfile is not None and keyfile != '':
      return creds.CredentialSource.FromKeyfile(keyfile)
    for prop, payload_kind in (
        (self.section.keyfile, creds.CredentialSourceType.KEYFILE_PATH),
        (self.section.keyfile_json, creds.CredentialSourceType.KEYFILE_JSON)):
      value = prop.Get()
      if value is not None:
        return creds.CredentialSource.FromEnvironment(
            str(prop), value, payload_kind)
    return creds.CredentialSource.AmbientDefault()

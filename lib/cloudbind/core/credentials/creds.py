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

"""Utilities to load google-auth credentials from keyfiles and defaults."""

import collections
import enum
import json
import os

import google.auth
from google.auth import compute_engine
from google.auth import credentials as google_auth_credentials
from google.auth import exceptions as google_auth_exceptions
from google.oauth2 import credentials as user_credentials
from google.oauth2 import service_account

from cloudbind.core import exceptions
from cloudbind.core import log


class Error(exceptions.CredentialError):
  """Exceptions for this module."""


class UnknownCredentialsType(Error):
  """An error for when we fail to determine the type of the credentials."""


class InvalidCredentialsError(Error):
  """The keyfile contents are not a valid credential payload."""


class InvalidCredentialFileException(Error):
  """Exception for when an external credential file could not be loaded."""

  def __init__(self, f, e):
    super(InvalidCredentialFileException, self).__init__(
        'Failed to load credential file: [{f}]. {message}'
        .format(f=f, message=str(e)))


class DefaultCredentialsError(Error):
  """Application default credentials are not available."""


class CredentialSourceType(enum.Enum):
  """Enum of the places credentials can come from."""

  EXPLICIT_KEY = 'explicit_key'
  KEYFILE_PATH = 'keyfile_path'
  KEYFILE_JSON = 'keyfile_json'
  ENVIRONMENT_VARIABLE = 'environment_variable'
  AMBIENT_DEFAULT = 'ambient_default'
  CREDENTIALS = 'credentials'


class CredentialSource(
    collections.namedtuple('CredentialSource',
                           ['kind', 'value', 'name', 'payload_kind'])):
  """Where the credentials of a client come from.

  A source is decided once, when the caller's input is normalized, and is not
  re-inspected afterwards.

  Attributes:
    kind: CredentialSourceType, The kind of source.
    value: The key, path, JSON text or dict, or credentials object. None for
      AMBIENT_DEFAULT.
    name: str, The property whose environment variables held the value, only
      for ENVIRONMENT_VARIABLE sources.
    payload_kind: CredentialSourceType, KEYFILE_PATH or KEYFILE_JSON, the
      meaning of the value of an ENVIRONMENT_VARIABLE source.
  """

  def __new__(cls, kind, value=None, name=None, payload_kind=None):
    return super(CredentialSource, cls).__new__(
        cls, kind, value, name, payload_kind)

  @classmethod
  def FromKey(cls, key):
    return cls(CredentialSourceType.EXPLICIT_KEY, key)

  @classmethod
  def FromKeyfile(cls, keyfile):
    """Normalizes an explicit keyfile argument.

    Args:
      keyfile: A google-auth credentials object, a dict holding a parsed
        keyfile, the path of a keyfile on disk, or the JSON text of a keyfile.
        A string is a path only if a file exists there.

    Raises:
      UnknownCredentialsType: If keyfile is none of the above.

    Returns:
      CredentialSource, The normalized source.
    """
    if isinstance(keyfile, google_auth_credentials.Credentials):
      return cls(CredentialSourceType.CREDENTIALS, keyfile)
    if isinstance(keyfile, dict):
      return cls(CredentialSourceType.KEYFILE_JSON, keyfile)
    if isinstance(keyfile, str):
      if os.path.isfile(keyfile):
        return cls(CredentialSourceType.KEYFILE_PATH, keyfile)
      return cls(CredentialSourceType.KEYFILE_JSON, keyfile)
    raise UnknownCredentialsType(
        'keyfile must be a path, JSON text, a dict or a credentials object, '
        'not [{0}]'.format(type(keyfile).__name__))

  @classmethod
  def FromEnvironment(cls, name, value, payload_kind):
    return cls(CredentialSourceType.ENVIRONMENT_VARIABLE, value, name=name,
               payload_kind=payload_kind)

  @classmethod
  def AmbientDefault(cls):
    return cls(CredentialSourceType.AMBIENT_DEFAULT)


class CredentialType(enum.Enum):
  """Enum of credential types understood by cloudbind."""

  UNKNOWN = (0, 'unknown')
  USER_ACCOUNT = (1, 'authorized_user')
  SERVICE_ACCOUNT = (2, 'service_account')
  GCE = (3, 'gce')

  def __init__(self, type_id, key):
    self.type_id = type_id
    self.key = key

  @staticmethod
  def FromTypeKey(key):
    for cred_type in CredentialType:
      if cred_type.key == key:
        return cred_type
    return CredentialType.UNKNOWN

  @staticmethod
  def FromCredentials(creds):
    if isinstance(creds, compute_engine.Credentials):
      return CredentialType.GCE
    if isinstance(creds, service_account.Credentials):
      return CredentialType.SERVICE_ACCOUNT
    if isinstance(creds, user_credentials.Credentials):
      return CredentialType.USER_ACCOUNT
    return CredentialType.UNKNOWN


def ScopeList(scope):
  """Normalizes a scope argument into a list of scopes, or None."""
  if scope is None:
    return None
  if isinstance(scope, str):
    return [scope]
  return list(scope)


def FromJson(json_value, scopes=None, default_scopes=None):
  """Returns google-auth credentials from the contents of a JSON keyfile.

  Args:
    json_value: str | dict, The keyfile contents, either as text or parsed.
    scopes: [str], The scopes requested by the caller, or None.
    default_scopes: [str], The scopes used when the caller requested none.

  Raises:
    InvalidCredentialsError: If the contents are not valid JSON or are not
      accepted by google-auth.
    UnknownCredentialsType: If the keyfile type is not supported.

  Returns:
    google.auth.credentials.Credentials, The loaded credentials.
  """
  if isinstance(json_value, dict):
    json_key = json_value
  else:
    try:
      json_key = json.loads(json_value)
    except (TypeError, ValueError) as e:
      raise InvalidCredentialsError(
          'The keyfile is neither an existing file nor valid JSON: {0}'.format(
              e))
  if not isinstance(json_key, dict):
    raise InvalidCredentialsError('The keyfile JSON must be an object.')

  cred_type = CredentialType.FromTypeKey(json_key.get('type'))
  try:
    if cred_type == CredentialType.SERVICE_ACCOUNT:
      cred = service_account.Credentials.from_service_account_info(
          json_key, scopes=scopes, default_scopes=default_scopes)
    elif cred_type == CredentialType.USER_ACCOUNT:
      cred = user_credentials.Credentials.from_authorized_user_info(
          json_key, scopes=scopes or default_scopes)
    else:
      raise UnknownCredentialsType(
          'Unsupported keyfile type [{0}]'.format(json_key.get('type')))
  except (KeyError, ValueError) as e:
    raise InvalidCredentialsError(
        'The keyfile is not a valid [{0}] credential: {1}'.format(
            cred_type.key, e))
  log.debug('Loaded %s credentials from keyfile.', cred_type.key)
  return cred


def FromFile(path, scopes=None, default_scopes=None):
  """Returns google-auth credentials from a JSON keyfile on disk.

  Args:
    path: str, The path of the keyfile.
    scopes: [str], The scopes requested by the caller, or None.
    default_scopes: [str], The scopes used when the caller requested none.

  Raises:
    InvalidCredentialFileException: If the file cannot be read.
    InvalidCredentialsError: If the file does not hold valid credentials.

  Returns:
    google.auth.credentials.Credentials, The loaded credentials.
  """
  try:
    with open(path) as keyfile:
      contents = keyfile.read()
  except (IOError, OSError) as e:
    raise InvalidCredentialFileException(path, e)
  log.debug('Read keyfile [%s].', path)
  return FromJson(contents, scopes=scopes, default_scopes=default_scopes)


def Default(scopes=None, default_scopes=None):
  """Returns application default credentials.

  This consults GOOGLE_APPLICATION_CREDENTIALS, the gcloud well known file and
  the metadata server, in the order google-auth defines.

  Args:
    scopes: [str], The scopes requested by the caller, or None.
    default_scopes: [str], The scopes used when the caller requested none.

  Raises:
    DefaultCredentialsError: If no default credentials can be found.

  Returns:
    google.auth.credentials.Credentials, The default credentials.
  """
  try:
    cred, _ = google.auth.default(
        scopes=scopes, default_scopes=default_scopes)
  except google_auth_exceptions.DefaultCredentialsError as e:
    raise DefaultCredentialsError(str(e))
  log.debug('Using application default credentials.')
  return cred


def Load(source, scopes=None, default_scopes=None):
  """Loads the credentials a source describes.

  Args:
    source: CredentialSource, Where the credentials come from.
    scopes: str | [str], The scopes requested by the caller, or None.
    default_scopes: [str], The scopes used when the caller requested none.

  Raises:
    Error: If the credentials cannot be loaded.

  Returns:
    google.auth.credentials.Credentials, The loaded credentials.
  """
  scopes = ScopeList(scopes)
  kind = source.kind
  if kind == CredentialSourceType.ENVIRONMENT_VARIABLE:
    log.debug('Loading credentials from the environment of [%s].',
              source.name)
    kind = source.payload_kind

  if kind == CredentialSourceType.CREDENTIALS:
    return source.value
  if kind == CredentialSourceType.KEYFILE_PATH:
    return FromFile(source.value, scopes=scopes,
                    default_scopes=default_scopes)
  if kind == CredentialSourceType.KEYFILE_JSON:
    return FromJson(source.value, scopes=scopes,
                    default_scopes=default_scopes)
  if kind == CredentialSourceType.AMBIENT_DEFAULT:
    return Default(scopes=scopes, default_scopes=default_scopes)
  raise UnknownCredentialsType(
      'Credentials cannot be loaded from a [{0}] source.'.format(kind.value))

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

"""Tests for cloudbind.core.credentials.creds."""

import json
from unittest import mock

from google.auth import credentials as google_auth_credentials
from google.auth import exceptions as google_auth_exceptions
from google.oauth2 import credentials as user_credentials
from google.oauth2 import service_account
import pytest

from cloudbind.core import exceptions
from cloudbind.core.credentials import creds


SERVICE_ACCOUNT_INFO = {
    'type': 'service_account',
    'project_id': 'my-project',
    'client_email': 'robot@my-project.iam.gserviceaccount.com',
    'private_key': 'not-a-real-key',
    'token_uri': 'https://oauth2.googleapis.com/token',
}

AUTHORIZED_USER_INFO = {
    'type': 'authorized_user',
    'client_id': 'client-id',
    'client_secret': 'client-secret',
    'refresh_token': 'refresh-token',
}

DEFAULT_SCOPES = ['https://www.googleapis.com/auth/cloud-platform']


@pytest.fixture
def keyfile(tmp_path):
  path = tmp_path / 'keyfile.json'
  path.write_text('{}')
  return str(path)


class TestCredentialSource(object):

  def testExistingPathIsAFile(self, keyfile):
    source = creds.CredentialSource.FromKeyfile(keyfile)
    assert source.kind == creds.CredentialSourceType.KEYFILE_PATH
    assert source.value == keyfile

  def testMissingPathIsJson(self):
    source = creds.CredentialSource.FromKeyfile('path/to/keyfile.json')
    assert source.kind == creds.CredentialSourceType.KEYFILE_JSON
    assert source.value == 'path/to/keyfile.json'

  def testJsonText(self):
    text = json.dumps(SERVICE_ACCOUNT_INFO)
    source = creds.CredentialSource.FromKeyfile(text)
    assert source.kind == creds.CredentialSourceType.KEYFILE_JSON
    assert source.value == text

  def testDict(self):
    source = creds.CredentialSource.FromKeyfile(SERVICE_ACCOUNT_INFO)
    assert source.kind == creds.CredentialSourceType.KEYFILE_JSON

  def testCredentialsObject(self):
    credentials = mock.create_autospec(
        google_auth_credentials.Credentials, instance=True)
    source = creds.CredentialSource.FromKeyfile(credentials)
    assert source.kind == creds.CredentialSourceType.CREDENTIALS
    assert creds.Load(source) is credentials

  def testUnsupportedKeyfile(self):
    with pytest.raises(creds.UnknownCredentialsType):
      creds.CredentialSource.FromKeyfile(42)

  def testEnvironmentSource(self):
    source = creds.CredentialSource.FromEnvironment(
        'bigquery/keyfile', '/key.json',
        creds.CredentialSourceType.KEYFILE_PATH)
    assert source.kind == creds.CredentialSourceType.ENVIRONMENT_VARIABLE
    assert source.name == 'bigquery/keyfile'
    assert source.payload_kind == creds.CredentialSourceType.KEYFILE_PATH


class TestFromJson(object):

  def testServiceAccount(self):
    with mock.patch.object(service_account.Credentials,
                           'from_service_account_info') as from_info:
      result = creds.FromJson(json.dumps(SERVICE_ACCOUNT_INFO),
                              default_scopes=DEFAULT_SCOPES)
    from_info.assert_called_once_with(
        SERVICE_ACCOUNT_INFO, scopes=None, default_scopes=DEFAULT_SCOPES)
    assert result is from_info.return_value

  def testServiceAccountWithScopes(self):
    with mock.patch.object(service_account.Credentials,
                           'from_service_account_info') as from_info:
      creds.FromJson(SERVICE_ACCOUNT_INFO, scopes=['a', 'b'],
                     default_scopes=DEFAULT_SCOPES)
    from_info.assert_called_once_with(
        SERVICE_ACCOUNT_INFO, scopes=['a', 'b'], default_scopes=DEFAULT_SCOPES)

  def testAuthorizedUser(self):
    with mock.patch.object(user_credentials.Credentials,
                           'from_authorized_user_info') as from_info:
      result = creds.FromJson(AUTHORIZED_USER_INFO,
                              default_scopes=DEFAULT_SCOPES)
    from_info.assert_called_once_with(AUTHORIZED_USER_INFO,
                                      scopes=DEFAULT_SCOPES)
    assert result is from_info.return_value

  def testInvalidJson(self):
    with pytest.raises(creds.InvalidCredentialsError) as e:
      creds.FromJson('path/to/keyfile.json')
    assert isinstance(e.value, exceptions.CredentialError)

  def testJsonNotAnObject(self):
    with pytest.raises(creds.InvalidCredentialsError):
      creds.FromJson('[1, 2]')

  def testUnknownType(self):
    with pytest.raises(creds.UnknownCredentialsType):
      creds.FromJson('{}')

  def testRejectedByGoogleAuth(self):
    with mock.patch.object(service_account.Credentials,
                           'from_service_account_info',
                           side_effect=ValueError('bad key')):
      with pytest.raises(creds.InvalidCredentialsError) as e:
        creds.FromJson(SERVICE_ACCOUNT_INFO)
    assert 'bad key' in str(e.value)


class TestFromFile(object):

  def testReadsFileContents(self, keyfile):
    with mock.patch.object(creds, 'FromJson') as from_json:
      result = creds.Load(creds.CredentialSource.FromKeyfile(keyfile),
                          scopes='scope', default_scopes=DEFAULT_SCOPES)
    from_json.assert_called_once_with(
        '{}', scopes=['scope'], default_scopes=DEFAULT_SCOPES)
    assert result is from_json.return_value

  def testMissingFile(self, tmp_path):
    with pytest.raises(creds.InvalidCredentialFileException) as e:
      creds.FromFile(str(tmp_path / 'missing.json'))
    assert isinstance(e.value, exceptions.CredentialError)

  def testEnvironmentPath(self, keyfile):
    source = creds.CredentialSource.FromEnvironment(
        'core/keyfile', keyfile, creds.CredentialSourceType.KEYFILE_PATH)
    with mock.patch.object(creds, 'FromJson') as from_json:
      creds.Load(source)
    from_json.assert_called_once_with('{}', scopes=None, default_scopes=None)

  def testEnvironmentJson(self):
    source = creds.CredentialSource.FromEnvironment(
        'core/keyfile_json', '{"type": "service_account"}',
        creds.CredentialSourceType.KEYFILE_JSON)
    with mock.patch.object(creds, 'FromJson') as from_json:
      creds.Load(source)
    from_json.assert_called_once_with(
        '{"type": "service_account"}', scopes=None, default_scopes=None)


class TestDefault(object):

  def testDefault(self, default_credentials):
    source = creds.CredentialSource.AmbientDefault()
    result = creds.Load(source, scopes=['a'], default_scopes=DEFAULT_SCOPES)
    assert result is default_credentials.credentials
    default_credentials.assert_called_once_with(
        scopes=['a'], default_scopes=DEFAULT_SCOPES)

  def testNoDefaultCredentials(self):
    with mock.patch('google.auth.default',
                    side_effect=google_auth_exceptions.DefaultCredentialsError(
                        'not found')):
      with pytest.raises(creds.DefaultCredentialsError) as e:
        creds.Default()
    assert isinstance(e.value, exceptions.CredentialError)

  def testKeyIsNotLoadable(self):
    with pytest.raises(creds.UnknownCredentialsType):
      creds.Load(creds.CredentialSource.FromKey('api-key'))


class TestCredentialType(object):

  def testFromTypeKey(self):
    assert (creds.CredentialType.FromTypeKey('service_account') ==
            creds.CredentialType.SERVICE_ACCOUNT)
    assert (creds.CredentialType.FromTypeKey('authorized_user') ==
            creds.CredentialType.USER_ACCOUNT)
    assert (creds.CredentialType.FromTypeKey('p12') ==
            creds.CredentialType.UNKNOWN)

  def testFromCredentials(self):
    credentials = mock.create_autospec(
        user_credentials.Credentials, instance=True)
    assert (creds.CredentialType.FromCredentials(credentials) ==
            creds.CredentialType.USER_ACCOUNT)
    assert (creds.CredentialType.FromCredentials(object()) ==
            creds.CredentialType.UNKNOWN)


@pytest.mark.parametrize('scope, expected', [
    (None, None),
    ('one', ['one']),
    (('one', 'two'), ['one', 'two']),
])
def testScopeList(scope, expected):
  assert creds.ScopeList(scope) == expected

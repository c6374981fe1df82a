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

"""Tests for cloudbind.core.resolvers."""

import json
from unittest import mock

import pytest

from cloudbind.core import exceptions
from cloudbind.core import properties
from cloudbind.core import resolvers
from cloudbind.core.credentials import creds
from cloudbind.core.credentials import gce_cache


BIGQUERY_SCOPES = ['https://www.googleapis.com/auth/bigquery']
TRANSLATE_SCOPES = ['https://www.googleapis.com/auth/cloud-platform']


@pytest.fixture
def bigquery():
  return resolvers.CredentialResolver(properties.VALUES.bigquery,
                                      BIGQUERY_SCOPES)


@pytest.fixture
def translate():
  return resolvers.CredentialResolver(properties.VALUES.translate,
                                      TRANSLATE_SCOPES)


@pytest.fixture
def load():
  with mock.patch.object(creds, 'Load') as load:
    yield load


def _Source(load):
  return load.call_args[0][0]


class TestProject(object):

  @pytest.mark.parametrize('env, expected', [
      ({'BIGQUERY_PROJECT': 'bq-project',
        'GOOGLE_CLOUD_PROJECT': 'cloud-project',
        'GCLOUD_PROJECT': 'gcloud-project'}, 'bq-project'),
      ({'GOOGLE_CLOUD_PROJECT': 'cloud-project',
        'GCLOUD_PROJECT': 'gcloud-project'}, 'cloud-project'),
      ({'GCLOUD_PROJECT': 'gcloud-project'}, 'gcloud-project'),
      ({'BIGQUERY_PROJECT': '', 'GCLOUD_PROJECT': 'gcloud-project'},
       'gcloud-project'),
  ])
  def testEnvironmentOrder(self, bigquery, load, environment, env, expected):
    environment.update(env)
    assert bigquery.Resolve().project == expected

  def testExplicitWins(self, bigquery, load, environment):
    environment['BIGQUERY_PROJECT'] = 'bq-project'
    environment['GOOGLE_CLOUD_PROJECT'] = 'cloud-project'
    assert bigquery.Resolve(project='my-project').project == 'my-project'

  def testProjectNumberIsRejected(self, bigquery, load):
    with pytest.raises(properties.InvalidProjectError):
      bigquery.Resolve(project=123456)

  def testEmptyExplicitIsAbsent(self, bigquery, load, environment):
    environment['GCLOUD_PROJECT'] = 'gcloud-project'
    assert bigquery.Resolve(project='').project == 'gcloud-project'

  def testOtherServiceVariableIgnored(self, bigquery, load, environment):
    environment['DATASTORE_PROJECT'] = 'ds-project'
    with pytest.raises(resolvers.MissingProjectError):
      bigquery.Resolve()

  def testMetadataServer(self, bigquery, load):
    with mock.patch.object(gce_cache, 'GetProjectId',
                           return_value='project-123'):
      resolved = bigquery.Resolve()
    assert resolved.project == 'project-123'
    assert _Source(load).kind == creds.CredentialSourceType.AMBIENT_DEFAULT

  def testMissingProject(self, bigquery, load):
    with pytest.raises(resolvers.MissingProjectError) as e:
      bigquery.Resolve()
    assert str(e.value) == 'project is missing'
    assert isinstance(e.value, exceptions.ConfigurationError)
    assert not isinstance(e.value, exceptions.CredentialError)
    load.assert_not_called()

  def testInvalidExplicitProject(self, bigquery, load):
    with pytest.raises(properties.InvalidProjectError):
      bigquery.Resolve(project='My Project')

  def testSetProperty(self, bigquery, load, environment):
    environment['BIGQUERY_PROJECT'] = 'bq-project'
    properties.VALUES.bigquery.project.Set('set-project')
    assert bigquery.Resolve().project == 'set-project'


class TestCredentials(object):

  def testExplicitKeyfilePath(self, bigquery, load, tmp_path):
    path = tmp_path / 'keyfile.json'
    path.write_text('{}')
    resolved = bigquery.Resolve(project='my-project', keyfile=str(path))

    source = _Source(load)
    assert source.kind == creds.CredentialSourceType.KEYFILE_PATH
    assert source.value == str(path)
    assert resolved.credentials is load.return_value

  def testExplicitKeyfileJson(self, bigquery, load):
    text = json.dumps({'type': 'service_account'})
    bigquery.Resolve(project='my-project', keyfile=text)
    source = _Source(load)
    assert source.kind == creds.CredentialSourceType.KEYFILE_JSON
    assert source.value == text

  def testExplicitKeyfileWinsOverEnvironment(self, bigquery, load,
                                             environment):
    environment['BIGQUERY_KEYFILE'] = '/env/keyfile.json'
    bigquery.Resolve(project='my-project', keyfile={'type': 'authorized_user'})
    assert _Source(load).kind == creds.CredentialSourceType.KEYFILE_JSON

  def testEmptyExplicitKeyfileIsAbsent(self, bigquery, load, environment):
    environment['BIGQUERY_KEYFILE'] = '/env/keyfile.json'
    bigquery.Resolve(project='my-project', keyfile='')
    source = _Source(load)
    assert source.kind == creds.CredentialSourceType.ENVIRONMENT_VARIABLE
    assert source.value == '/env/keyfile.json'

  @pytest.mark.parametrize('env, value, payload_kind', [
      ({'BIGQUERY_KEYFILE': '/bq.json', 'GOOGLE_CLOUD_KEYFILE': '/cloud.json'},
       '/bq.json', creds.CredentialSourceType.KEYFILE_PATH),
      ({'GOOGLE_CLOUD_KEYFILE': '/cloud.json', 'GCLOUD_KEYFILE': '/g.json'},
       '/cloud.json', creds.CredentialSourceType.KEYFILE_PATH),
      ({'GCLOUD_KEYFILE': '/g.json'},
       '/g.json', creds.CredentialSourceType.KEYFILE_PATH),
      ({'BIGQUERY_KEYFILE_JSON': '{"bq": 1}',
        'GOOGLE_CLOUD_KEYFILE_JSON': '{"cloud": 1}'},
       '{"bq": 1}', creds.CredentialSourceType.KEYFILE_JSON),
      ({'GCLOUD_KEYFILE_JSON': '{"g": 1}'},
       '{"g": 1}', creds.CredentialSourceType.KEYFILE_JSON),
      ({'GCLOUD_KEYFILE': '/g.json', 'BIGQUERY_KEYFILE_JSON': '{"bq": 1}'},
       '/g.json', creds.CredentialSourceType.KEYFILE_PATH),
  ])
  def testEnvironmentOrder(self, bigquery, load, environment, env, value,
                           payload_kind):
    environment.update(env)
    bigquery.Resolve(project='my-project')
    source = _Source(load)
    assert source.kind == creds.CredentialSourceType.ENVIRONMENT_VARIABLE
    assert source.value == value
    assert source.payload_kind == payload_kind

  def testEnvironmentSourceNamesProperty(self, bigquery, load, environment):
    environment['BIGQUERY_KEYFILE_JSON'] = '{}'
    bigquery.Resolve(project='my-project')
    assert _Source(load).name == 'bigquery/keyfile_json'

  def testAmbientDefault(self, bigquery, default_credentials):
    resolved = bigquery.Resolve(project='my-project')
    assert resolved.credentials is default_credentials.credentials
    default_credentials.assert_called_once_with(
        scopes=None, default_scopes=BIGQUERY_SCOPES)

  def testScopeIsPassedThrough(self, bigquery, load):
    resolved = bigquery.Resolve(project='my-project', scope='custom-scope')
    assert resolved.scope == ['custom-scope']
    load.assert_called_once_with(mock.ANY, scopes=['custom-scope'],
                                 default_scopes=BIGQUERY_SCOPES)

  def testCredentialErrorIsNotConfigurationError(self, bigquery):
    with pytest.raises(exceptions.CredentialError) as e:
      bigquery.Resolve(project='my-project', keyfile='not json')
    assert not isinstance(e.value, exceptions.ConfigurationError)

  def testAmbientDefaultUnavailable(self, bigquery):
    with mock.patch.object(
        creds, 'Default',
        side_effect=creds.DefaultCredentialsError('no credentials')):
      with pytest.raises(exceptions.CredentialError):
        bigquery.Resolve(project='my-project')

  def testRetriesAndTimeoutAreCarried(self, bigquery, load):
    resolved = bigquery.Resolve(project='my-project', retries=5, timeout=60)
    assert resolved.retries == 5
    assert resolved.timeout == 60

  def testMetadataProjectWithAmbientCredentials(self, bigquery,
                                                default_credentials):
    with mock.patch.object(gce_cache, 'GetProjectId',
                           return_value='project-123'):
      resolved = bigquery.Resolve()
    assert resolved == resolvers.ResolvedConfig(
        'project-123', credentials=default_credentials.credentials)


class TestKey(object):

  def testExplicitKey(self, translate, load):
    resolved = translate.Resolve(key='this-is-a-key')
    assert resolved.key == 'this-is-a-key'
    assert resolved.credentials is None
    assert resolved.project == ''
    load.assert_not_called()

  def testKeyKeepsExplicitProject(self, translate, load):
    resolved = translate.Resolve(key='this-is-a-key', project='my-project')
    assert resolved.project == 'my-project'

  @pytest.mark.parametrize('env, expected', [
      ({'TRANSLATE_KEY': 'translate-key', 'GOOGLE_CLOUD_KEY': 'cloud-key'},
       'translate-key'),
      ({'GOOGLE_CLOUD_KEY': 'cloud-key'}, 'cloud-key'),
  ])
  def testKeyFromEnvironment(self, translate, load, environment, env,
                             expected):
    environment.update(env)
    assert translate.Resolve().key == expected

  def testExplicitKeyWinsOverEnvironment(self, translate, load, environment):
    environment['TRANSLATE_KEY'] = 'translate-key'
    assert translate.Resolve(key='explicit-key').key == 'explicit-key'

  def testEmptyKeyFallsBackToCredentials(self, translate, load, environment):
    environment['TRANSLATE_PROJECT'] = 'translate-project'
    resolved = translate.Resolve(key='')
    assert resolved.key is None
    assert resolved.project == 'translate-project'
    assert resolved.credentials is load.return_value

  def testKeyIgnoredByServicesWithoutKeys(self, bigquery, load):
    resolved = bigquery.Resolve(key='this-is-a-key', project='my-project')
    assert resolved.key is None
    assert resolved.credentials is load.return_value

  def testKeySource(self, translate, bigquery, environment):
    environment['GOOGLE_CLOUD_KEY'] = 'cloud-key'
    source = translate.KeySource()
    assert source.kind == creds.CredentialSourceType.EXPLICIT_KEY
    assert source.value == 'cloud-key'
    assert translate.KeySource('explicit-key').value == 'explicit-key'
    assert bigquery.KeySource('explicit-key') is None

  def testNoKeySource(self, translate):
    assert translate.KeySource() is None
    assert translate.KeySource('') is None

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

"""Tests for cloudbind.datastore.dataset."""

from unittest import mock

import pytest

from cloudbind import datastore
from cloudbind.core import exceptions
from cloudbind.datastore import dataset as dataset_lib
from cloudbind.datastore import service as datastore_service


@pytest.fixture
def dataset():
  service = mock.create_autospec(datastore_service.Service, instance=True)
  service.project = 'my-project'
  service.Commit.return_value = {'mutationResults': []}
  return dataset_lib.Dataset(service)


def _Sent(dataset):
  dataset.service.Commit.assert_called_once()
  return dataset.service.Commit.call_args[0][0]


def testKeyUsesProject(dataset):
  key = dataset.Key('Task', 'sample')
  assert key.project == 'my-project'
  assert key.name == 'sample'


def testCommitScopeSendsOneRequest(dataset):
  task = dataset.Entity(dataset.Key('Task', 'one'), done=False)
  old = dataset.Key('Task', 'old')
  with dataset.Commit() as c:
    c.Delete(old)
    c.Save(task)
    dataset.service.Commit.assert_not_called()

  assert _Sent(dataset) == [
      {'upsert': task.ToJson()},
      {'delete': old.ToJson()},
  ]


def testCommitScopeSendsNothingOnError(dataset):
  with pytest.raises(RuntimeError):
    with dataset.Commit() as c:
      c.Save(dataset.Entity(dataset.Key('Task', 'one')))
      raise RuntimeError('changed my mind')
  dataset.service.Commit.assert_not_called()


def testCommitClosedAfterError(dataset):
  with pytest.raises(RuntimeError):
    with dataset.Commit() as c:
      raise RuntimeError('changed my mind')
  assert c.drained
  with pytest.raises(exceptions.CallerContractError):
    c.Save(dataset.Entity(dataset.Key('Task', 'late')))
  with pytest.raises(exceptions.CallerContractError):
    c.Delete(dataset.Key('Task', 'late'))
  dataset.service.Commit.assert_not_called()


def testDeleteEntityWithoutKey(dataset):
  with pytest.raises(exceptions.CallerContractError):
    with dataset.Commit() as c:
      c.Delete(dataset.Entity())
  dataset.service.Commit.assert_not_called()


def testEmptyCommitScopeSendsNothing(dataset):
  with dataset.Commit() as c:
    pass
  assert c.drained
  dataset.service.Commit.assert_not_called()


def testSaveCompletesKeys(dataset):
  complete = dataset.Entity(dataset.Key('Task', 'named'))
  incomplete = dataset.Entity(dataset.Key('Task'))
  dataset.service.Commit.return_value = {'mutationResults': [
      {},
      {'key': {'partitionId': {'projectId': 'my-project'},
               'path': [{'kind': 'Task', 'id': '5629499534213120'}]}},
  ]}

  assert dataset.Save(complete, incomplete) == [complete, incomplete]
  assert complete.key.name == 'named'
  assert incomplete.key.id == 5629499534213120
  assert incomplete.key.project == 'my-project'


def testDelete(dataset):
  task = dataset.Entity(dataset.Key('Task', 'one'))
  assert dataset.Delete(task, dataset.Key('Task', 2)) is True
  assert _Sent(dataset) == [
      {'delete': task.key.ToJson()},
      {'delete': dataset.Key('Task', 2).ToJson()},
  ]


def testServiceCommitBody():
  service = datastore_service.Service('my-project', mock.Mock())
  with mock.patch.object(service, 'Request') as request:
    service.Commit([{'delete': {'path': [{'kind': 'Task', 'name': 'a'}]}}])
  request.assert_called_once_with(
      'POST', '/projects/my-project:commit',
      body={'mode': 'NON_TRANSACTIONAL',
            'mutations': [{'delete': {'path': [{'kind': 'Task',
                                                'name': 'a'}]}}]})


def testNew(environment, default_credentials):
  environment['DATASTORE_PROJECT'] = 'ds-project'
  environment['BIGQUERY_PROJECT'] = 'bq-project'
  result = datastore.New(retries=3)
  assert isinstance(result, dataset_lib.Dataset)
  assert result.project == 'ds-project'
  assert result.service.retries == 3
  assert repr(result) == "Dataset(project='ds-project')"


def testDefaultProject(environment):
  environment['GOOGLE_CLOUD_PROJECT'] = 'cloud-project'
  assert dataset_lib.Dataset.DefaultProject() == 'cloud-project'

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

"""Shared configuration for clients of several services.

  from cloudbind import cloud

  gcloud = cloud.Cloud('my-project', '/path/to/keyfile.json')
  bigquery = gcloud.Bigquery()
  dataset = gcloud.Datastore(retries=5)

The project and keyfile given here are passed to every client. retries and
timeout given here are used by clients that do not set their own.
"""

from cloudbind import bigquery
from cloudbind import datastore
from cloudbind import translate


class Cloud(object):
  """Creates service clients that share a project and keyfile.

  Attributes:
    project: str, The project id, or None to resolve it per service.
    keyfile: The keyfile of every client, or None to resolve it per service.
    retries: int, The default number of retries of every client.
    timeout: float, The default request timeout of every client.
  """

  def __init__(self, project=None, keyfile=None, retries=None, timeout=None):
    self.project = project
    self.keyfile = keyfile
    self.retries = retries
    self.timeout = timeout

  def _Options(self, scope, retries, timeout):
    return dict(
        project=self.project,
        keyfile=self.keyfile,
        scope=scope,
        retries=self.retries if retries is None else retries,
        timeout=self.timeout if timeout is None else timeout)

  def Translate(self, key=None, scope=None, retries=None, timeout=None):
    """Creates a Translate Api object. See translate.New."""
    return translate.New(key=key, **self._Options(scope, retries, timeout))

  def Bigquery(self, scope=None, retries=None, timeout=None):
    """Creates a BigQuery Project object. See bigquery.New."""
    return bigquery.New(**self._Options(scope, retries, timeout))

  def Datastore(self, scope=None, retries=None, timeout=None):
    """Creates a Datastore Dataset object. See datastore.New."""
    return datastore.New(**self._Options(scope, retries, timeout))

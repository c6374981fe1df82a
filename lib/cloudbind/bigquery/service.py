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

"""Transport for the BigQuery API v2."""

from cloudbind.core import transport


class Service(transport.Service):
  """Forwards BigQuery API calls over an authorized session."""

  API_NAME = 'bigquery'
  BASE_URL = 'https://bigquery.googleapis.com/bigquery/v2'

  def _ProjectPath(self, suffix=''):
    return '/projects/{0}{1}'.format(self.project, suffix)

  def ListDatasets(self, max_results=None, token=None):
    params = {}
    if max_results is not None:
      params['maxResults'] = max_results
    if token is not None:
      params['pageToken'] = token
    return self.Request('GET', self._ProjectPath('/datasets'), params=params)

  def GetDataset(self, dataset_id):
    return self.Request(
        'GET', self._ProjectPath('/datasets/{0}'.format(dataset_id)))

  def Query(self, query, timeout_ms=None, use_legacy_sql=False):
    body = {'query': query, 'useLegacySql': use_legacy_sql}
    if timeout_ms is not None:
      body['timeoutMs'] = timeout_ms
    return self.Request('POST', self._ProjectPath('/queries'), body=body)

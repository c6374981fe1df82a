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

"""The BigQuery facade returned by cloudbind.bigquery.New."""

import collections

from cloudbind.core import exceptions
from cloudbind.core import properties


DatasetReference = collections.namedtuple(
    'DatasetReference', ['project_id', 'dataset_id'])

QueryData = collections.namedtuple(
    'QueryData', ['rows', 'total_rows', 'complete', 'job_id'])

_CONVERTERS = {
    'INTEGER': int,
    'INT64': int,
    'FLOAT': float,
    'FLOAT64': float,
    'BOOLEAN': lambda v: v.lower() == 'true',
    'BOOL': lambda v: v.lower() == 'true',
}


def _RowsToDicts(schema, rows):
  """Converts API rows ({'f': [{'v': ...}]}) to dicts keyed by column name."""
  fields = (schema or {}).get('fields', [])
  result = []
  for row in rows or []:
    values = {}
    for field, cell in zip(fields, row.get('f', [])):
      value = cell.get('v')
      converter = _CONVERTERS.get(field.get('type'))
      if value is not None and converter is not None:
        value = converter(value)
      values[field.get('name')] = value
    result.append(values)
  return result


class Project(object):
  """Lists datasets and runs queries in a BigQuery project.

  Attributes:
    service: bigquery.service.Service, The transport of this object.
  """

  def __init__(self, service):
    self.service = service

  @property
  def project(self):
    return self.service.project

  @staticmethod
  def DefaultProject():
    return properties.VALUES.bigquery.project.Get()

  def Datasets(self, max_results=None):
    """Lists the datasets of the project, following page tokens.

    Args:
      max_results: int, The maximum number of datasets per page.

    Returns:
      [DatasetReference], The datasets.
    """
    datasets = []
    token = None
    while True:
      response = self.service.ListDatasets(max_results=max_results,
                                           token=token)
      for dataset in response.get('datasets', []):
        ref = dataset.get('datasetReference', {})
        datasets.append(DatasetReference(ref.get('projectId'),
                                         ref.get('datasetId')))
      token = response.get('nextPageToken')
      if not token:
        return datasets

  def Dataset(self, dataset_id):
    """Returns the dataset resource, or None if it does not exist."""
    try:
      return self.service.GetDataset(dataset_id)
    except exceptions.HttpError as e:
      if e.status_code == 404:
        return None
      raise

  def Query(self, query, timeout_ms=None, legacy_sql=False):
    """Runs a query and returns the first page of its results.

    Args:
      query: str, The query to run.
      timeout_ms: int, How long the server should wait for the query.
      legacy_sql: bool, True to use legacy SQL instead of standard SQL.

    Returns:
      QueryData, The rows as dicts, plus completion information.
    """
    response = self.service.Query(query, timeout_ms=timeout_ms,
                                  use_legacy_sql=legacy_sql)
    total_rows = response.get('totalRows')
    return QueryData(
        rows=_RowsToDicts(response.get('schema'), response.get('rows')),
        total_rows=int(total_rows) if total_rows is not None else None,
        complete=response.get('jobComplete', False),
        job_id=response.get('jobReference', {}).get('jobId'))

  def __repr__(self):
    return 'Project(project={0!r})'.format(self.project)

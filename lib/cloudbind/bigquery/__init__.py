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

"""Client for Google BigQuery."""

from cloudbind.core import apis


API_NAME = 'bigquery'


def New(project=None, keyfile=None, scope=None, retries=None, timeout=None):
  """Creates a BigQuery Project object.

  Args:
    project: str, The project id. Resolved from BIGQUERY_PROJECT,
      GOOGLE_CLOUD_PROJECT, GCLOUD_PROJECT or the metadata server when None.
    keyfile: A keyfile path, keyfile JSON text or dict, or a google-auth
      credentials object. Resolved from the environment when None.
    scope: str | [str], The OAuth scopes to request.
    retries: int, Number of times to retry a failed request.
    timeout: float, Request timeout in seconds.

  Raises:
    ConfigurationError: If the project cannot be determined.
    CredentialError: If the credentials cannot be loaded.

  Returns:
    bigquery.project.Project, The BigQuery facade.
  """
  return apis.NewClient(API_NAME, project=project, keyfile=keyfile,
                        scope=scope, retries=retries, timeout=timeout)

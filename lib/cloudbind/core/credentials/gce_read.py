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

"""Utility functions for opening a GCE metadata URL and getting contents."""

import requests

from cloudbind.core import config
from cloudbind.core import properties


GOOGLE_GCE_METADATA_PATH = '/computeMetadata/v1'

GOOGLE_GCE_METADATA_PROJECT_PATH = (
    GOOGLE_GCE_METADATA_PATH + '/project/project-id')

GOOGLE_GCE_METADATA_NUMERIC_PROJECT_PATH = (
    GOOGLE_GCE_METADATA_PATH + '/project/numeric-project-id')

GOOGLE_GCE_METADATA_HEADERS = {'Metadata-Flavor': 'Google'}


def MetadataUri(path):
  """Returns the URI of a metadata path on the configured metadata host."""
  host = (properties.VALUES.environment.Get(config.GCE_METADATA_HOST_ENV) or
          config.GCE_METADATA_DEFAULT_HOST)
  return 'http://{host}{path}'.format(host=host, path=path)


def ReadNoProxy(uri):
  """Opens a URI with metadata headers, without a proxy, and reads all data.

  Args:
    uri: str, The metadata URI to read.

  Raises:
    requests.RequestException: If the server cannot be reached or answers with
      an error status.

  Returns:
    str, The body of the response.
  """
  with requests.Session() as session:
    # Never route metadata requests through a proxy from the environment.
    session.trust_env = False
    response = session.get(uri, headers=GOOGLE_GCE_METADATA_HEADERS,
                           timeout=config.GCE_METADATA_TIMEOUT)
    response.raise_for_status()
    return response.text

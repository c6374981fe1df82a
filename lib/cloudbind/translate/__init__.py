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

"""Client for the Google Cloud Translation API.

Translate accepts either an API key or project credentials:

  from cloudbind import translate

  api = translate.New(key='my-api-key')
  api.Translate('Hello world!', to='la')

Without a key the project and credentials are resolved like every other
service.
"""

from cloudbind.core import apis


API_NAME = 'translate'


def New(key=None, project=None, keyfile=None, scope=None, retries=None,
        timeout=None):
  """Creates a Translate Api object.

  An API key, explicit or from TRANSLATE_KEY or GOOGLE_CLOUD_KEY, takes
  precedence over project credentials.

  Args:
    key: str, An API key.
    project: str, The project id. Resolved from the environment when None.
    keyfile: A keyfile path, keyfile JSON text or dict, or a google-auth
      credentials object. Resolved from the environment when None.
    scope: str | [str], The OAuth scopes to request.
    retries: int, Number of times to retry a failed request.
    timeout: float, Request timeout in seconds.

  Returns:
    translate.api.Api, The Translate facade.
  """
  return apis.NewClient(API_NAME, key=key, project=project, keyfile=keyfile,
                        scope=scope, retries=retries, timeout=timeout)

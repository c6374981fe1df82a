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

"""Transport for the Datastore API v1."""

from cloudbind.core import transport


class Service(transport.Service):
  """Forwards Datastore API calls over an authorized session."""

  API_NAME = 'datastore'
  BASE_URL = 'https://datastore.googleapis.com/v1'

  def Commit(self, mutations):
    """Sends mutations in one non-transactional commit request.

    Args:
      mutations: [dict], The JSON form of the mutations, in order.

    Returns:
      dict, The CommitResponse.
    """
    body = {'mode': 'NON_TRANSACTIONAL', 'mutations': mutations}
    return self.Request(
        'POST', '/projects/{0}:commit'.format(self.project), body=body)

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

"""Transport for the Translation API v2."""

from cloudbind.core import transport


class Service(transport.Service):
  """Forwards Translation API calls over an authorized session."""

  API_NAME = 'translate'
  BASE_URL = 'https://translation.googleapis.com/language/translate/v2'

  def Translate(self, text, to, from_=None, format=None, model=None,
                cid=None):
    # pylint: disable=redefined-builtin, format is the API's parameter name.
    body = {'q': list(text), 'target': to}
    for name, value in (('source', from_), ('format', format),
                        ('model', model), ('cid', cid)):
      if value is not None:
        body[name] = value
    return self.Request('POST', '', body=body)

  def Detect(self, text):
    return self.Request('POST', '/detect', body={'q': list(text)})

  def Languages(self, language=None):
    params = {}
    if language is not None:
      params['target'] = language
    return self.Request('GET', '/languages', params=params)

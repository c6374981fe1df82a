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

"""A module to get a configured requests.Session object."""

import platform

from google.auth.transport import requests as google_auth_requests
import requests
from urllib3.util import retry as urllib3_retry

from cloudbind.core import config
from cloudbind.core import log


RETRY_STATUS_CODES = (500, 502, 503, 504)


def MakeUserAgentString():
  """Return a user-agent string for requests made by cloudbind."""
  return '{product}/{version} python/{py_version}'.format(
      product=config.CLOUDBIND_PRODUCT_NAME,
      version=config.CLOUDBIND_VERSION,
      py_version=platform.python_version())


def GetSession(credentials=None, retries=None, timeout=None, session=None):
  """Get a requests.Session that is configured for use by cloudbind.

  retries and timeout are passed through as given. When either is None the
  underlying library keeps its own default: no retry adapter is mounted and no
  timeout is added to requests.

  Args:
    credentials: google.auth.credentials.Credentials, Credentials to authorize
      requests with. If None, the session is not authorized.
    retries: int, The number of times to retry a request that failed to
      connect or got a server error.
    timeout: float, The request timeout in seconds.
    session: requests.Session instance to configure. Only used when no
      credentials are given.

  Returns:
    A requests.Session object configured with all the required settings.
  """
  if credentials is not None:
    session = google_auth_requests.AuthorizedSession(credentials)
  else:
    session = session or requests.Session()
  session.headers['User-Agent'] = MakeUserAgentString()

  if retries is not None:
    # Every API call is retried on server errors, POST included.
    adapter = requests.adapters.HTTPAdapter(
        max_retries=urllib3_retry.Retry(
            total=retries, status_forcelist=RETRY_STATUS_CODES,
            allowed_methods=None, raise_on_status=False))
    session.mount('https://', adapter)
    session.mount('http://', adapter)

  if timeout is not None:
    orig_request_method = session.request

    def WrappedRequest(*args, **kwargs):
      if 'timeout' not in kwargs:
        kwargs['timeout'] = timeout
      return orig_request_method(*args, **kwargs)
    session.request = WrappedRequest

  log.debug('Created session with retries [%s] and timeout [%s].',
            retries, timeout)
  return session

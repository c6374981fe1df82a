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

"""Base class of the per-service transport objects."""

from cloudbind.core import exceptions
from cloudbind.core import log
from cloudbind.core import properties
from cloudbind.core import requests as core_requests


class Service(object):
  """Holds the connection to one API on behalf of a facade object.

  Subclasses set API_NAME and BASE_URL and add one method per call they
  forward. The session is created on first use, so constructing a Service
  performs no I/O.

  Attributes:
    project: str, The project the service operates on.
    credentials: google.auth.credentials.Credentials, or None when an API key
      is used.
    key: str, The API key, or None.
    retries: int, The number of retries, or None for the transport default.
    timeout: float, The request timeout, or None for the transport default.
    endpoint: str, The root URL requests are sent to.
  """

  API_NAME = None
  BASE_URL = None

  def __init__(self, project, credentials, key=None, retries=None,
               timeout=None):
    self.project = project
    self.credentials = credentials
    self.key = key
    self.retries = retries
    self.timeout = timeout
    self.endpoint = self.GetEffectiveEndpoint()
    self._session = None

  @classmethod
  def GetEffectiveEndpoint(cls):
    """Returns the endpoint override for this API if set, else BASE_URL."""
    overrides = properties.VALUES.api_endpoint_overrides
    if cls.API_NAME and overrides.HasProperty(cls.API_NAME):
      override = overrides.Property(cls.API_NAME).Get()
      if override:
        return override.rstrip('/')
    return cls.BASE_URL

  @property
  def session(self):
    if self._session is None:
      self._session = core_requests.GetSession(
          credentials=self.credentials, retries=self.retries,
          timeout=self.timeout)
    return self._session

  def Request(self, method, path, params=None, body=None):
    """Sends a request to the API and returns the decoded JSON response.

    Args:
      method: str, The HTTP method.
      path: str, The path relative to the endpoint, starting with '/'.
      params: {str: str}, Query parameters.
      body: The JSON serializable request body, if any.

    Raises:
      exceptions.HttpError: If the API answers with an error status.

    Returns:
      The decoded JSON response, {} for an empty body.
    """
    params = dict(params or {})
    if self.key:
      params['key'] = self.key
    url = self.endpoint + path
    log.debug('%s %s', method, url)
    response = self.session.request(method, url, params=params, json=body)
    if not response.ok:
      raise exceptions.HttpError.FromResponse(response)
    if not response.content:
      return {}
    return response.json()

  def __repr__(self):
    return '{0}(project={1!r})'.format(type(self).__name__, self.project)

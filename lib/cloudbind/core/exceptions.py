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

"""Base exceptions for the cloudbind libraries."""


class Error(Exception):
  """Base exception for cloudbind.

  All errors raised by this package derive from this class so callers can
  catch a single type.
  """


class ConfigurationError(Error):
  """A project or other required setting is missing or invalid."""


class CredentialError(Error):
  """A keyfile could not be read or its contents are not valid credentials."""


class CallerContractError(Error):
  """An object was used in a way its contract does not allow.

  Raised, for example, when a commit batch is drained twice or modified after
  its mutations have been handed to the backend.
  """


class HttpError(Error):
  """The backend answered a request with an error status.

  Attributes:
    status_code: int, The HTTP status code of the response.
    message: str, The error message reported by the server, if any.
    url: str, The URL of the failed request.
  """

  def __init__(self, status_code, message, url=None):
    super(HttpError, self).__init__(
        'HTTPError {0}: {1}'.format(status_code, message))
    self.status_code = status_code
    self.message = message
    self.url = url

  @classmethod
  def FromResponse(cls, response):
    """Builds an HttpError from a requests.Response.

    Google APIs report errors as {"error": {"code": ..., "message": ...}}. When
    the body is not in that shape the raw text is used as the message.

    Args:
      response: requests.Response, The failed response.

    Returns:
      HttpError, The error describing the response.
    """
    message = response.text
    try:
      payload = response.json()
    except ValueError:
      payload = None
    if isinstance(payload, dict) and isinstance(payload.get('error'), dict):
      message = payload['error'].get('message', message)
    return cls(response.status_code, message, url=response.url)

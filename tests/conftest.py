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

"""Shared fixtures for the cloudbind tests."""

from unittest import mock

import pytest
import requests

from cloudbind.core import log
from cloudbind.core import properties
from cloudbind.core.credentials import gce_cache
from cloudbind.core.credentials import gce_read


def _ResetProperties():
  for section in properties.VALUES:
    for prop in section:
      prop.Set(None)


@pytest.fixture(autouse=True)
def environment():
  """Runs every test with no environment variables and no cached metadata."""
  _ResetProperties()
  gce_cache.Clear()
  env = {}
  with properties.OverrideEnvironment(env):
    yield env
    _ResetProperties()
    log.Reset()
  gce_cache.Clear()


@pytest.fixture(autouse=True)
def no_metadata_server():
  """Makes the metadata server unreachable unless a test says otherwise."""
  with mock.patch.object(
      gce_read, 'ReadNoProxy',
      side_effect=requests.ConnectionError('no metadata server')) as read:
    yield read


@pytest.fixture
def default_credentials():
  """Stubs application default credentials."""
  credentials = mock.Mock(name='default_credentials')
  with mock.patch('google.auth.default',
                  return_value=(credentials, None)) as default:
    default.credentials = credentials
    yield default

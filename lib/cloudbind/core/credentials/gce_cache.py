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

"""Caching logic for checking if we're on GCE and which project it runs."""

from threading import Lock

import requests

from cloudbind.core import log
from cloudbind.core.credentials import gce_read


class _OnGCECache(object):
  """Logic to check if we're on GCE and cache the result in memory.

  Checking if we are on GCE is done by issuing an HTTP request to the metadata
  server. Since HTTP requests are slow and clients are often constructed many
  times in one process, the answer and the project id are kept in memory for
  the lifetime of the process. Both lookups are best effort: any failure to
  reach the server means "not on GCE".
  """

  def __init__(self):
    self.connected = None
    self.project_id = None
    self.project_id_read = False
    self.lock = Lock()

  def GetOnGCE(self):
    """Check if we are on a GCE machine.

    Returns:
      bool, if we are on GCE or not.
    """
    with self.lock:
      if self.connected is None:
        self.connected = self._CheckServer()
      return self.connected

  def GetProjectId(self):
    """Gets the project id from the metadata server.

    Returns:
      str, The project id, or None if it is not available.
    """
    if not self.GetOnGCE():
      return None
    with self.lock:
      if not self.project_id_read:
        self.project_id = self._ReadProjectId()
        self.project_id_read = True
      return self.project_id

  def Clear(self):
    with self.lock:
      self.connected = None
      self.project_id = None
      self.project_id_read = False

  def _CheckServer(self):
    try:
      numeric_project_id = gce_read.ReadNoProxy(
          gce_read.MetadataUri(
              gce_read.GOOGLE_GCE_METADATA_NUMERIC_PROJECT_PATH))
    except requests.RequestException as e:
      log.debug('Metadata server is not available: %s', e)
      return False
    else:
      return numeric_project_id.isdigit()

  def _ReadProjectId(self):
    try:
      project_id = gce_read.ReadNoProxy(
          gce_read.MetadataUri(gce_read.GOOGLE_GCE_METADATA_PROJECT_PATH))
    except requests.RequestException as e:
      log.debug('Could not read project id from metadata server: %s', e)
      return None
    return project_id.strip() or None

# Since a module is initialized only once, this is effectively a singleton
_SINGLETON_ON_GCE_CACHE = _OnGCECache()


def GetOnGCE():
  """Helper function to abstract the caching logic of if we're on GCE."""
  return _SINGLETON_ON_GCE_CACHE.GetOnGCE()


def GetProjectId():
  """Returns the project id of the GCE environment, or None if not on GCE."""
  return _SINGLETON_ON_GCE_CACHE.GetProjectId()


def Clear():
  """Forgets the cached answers so the next call asks the server again."""
  _SINGLETON_ON_GCE_CACHE.Clear()

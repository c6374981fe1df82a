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

"""The Datastore facade returned by cloudbind.datastore.New."""

import contextlib

from cloudbind.core import log
from cloudbind.core import properties
from cloudbind.datastore import commit as commit_lib
from cloudbind.datastore import entity as entity_lib
from cloudbind.datastore import key as key_lib


class Dataset(object):
  """Saves and deletes entities in a Datastore project.

  Attributes:
    service: datastore.service.Service, The transport of this object.
  """

  def __init__(self, service):
    self.service = service

  @property
  def project(self):
    return self.service.project

  @staticmethod
  def DefaultProject():
    return properties.VALUES.datastore.project.Get()

  def Key(self, kind, id_or_name=None, parent=None, namespace=None):
    """Creates a key in this dataset's project."""
    return key_lib.Key(kind, id_or_name, parent=parent, project=self.project,
                       namespace=namespace)

  def Entity(self, key=None, **props):
    """Creates an entity with the given key and properties."""
    return entity_lib.Entity(key, **props)

  @contextlib.contextmanager
  def Commit(self):
    """Opens a commit scope.

    Mutations queued on the yielded Commit are sent as one request when the
    block exits normally. If the block raises, nothing is sent and the batch
    is closed.

    Yields:
      commit.Commit, The batch to queue mutations on.
    """
    batch = commit_lib.Commit()
    try:
      yield batch
    except BaseException:
      batch.Close()
      raise
    self._Send(batch)

  def Save(self, *entities):
    """Saves entities in one request.

    Entities with incomplete keys get the keys allocated by the backend.

    Returns:
      [entity.Entity], The saved entities.
    """
    with self.Commit() as batch:
      saved = batch.Save(*entities)
    return saved

  def Delete(self, *entities_or_keys):
    """Deletes entities, given themselves or their keys, in one request."""
    with self.Commit() as batch:
      batch.Delete(*entities_or_keys)
    return True

  def _Send(self, batch):
    mutations = batch.Mutations()
    if not mutations:
      log.debug('Nothing to commit.')
      return None
    log.debug('Committing %d mutations to project [%s].', len(mutations),
              self.project)
    response = self.service.Commit([m.ToJson() for m in mutations])
    self._UpdateKeys(batch.Entities(), response.get('mutationResults', []))
    return response

  def _UpdateKeys(self, entities, results):
    # Results are in mutation order, and upserts come first.
    for entity, result in zip(entities, results):
      if entity.key is not None and entity.key.IsComplete():
        continue
      if 'key' in result:
        entity.key = key_lib.Key.FromJson(result['key'])

  def __repr__(self):
    return 'Dataset(project={0!r})'.format(self.project)

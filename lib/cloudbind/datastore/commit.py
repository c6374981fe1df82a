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

"""Accumulates the mutations of one Datastore commit."""

import collections

from cloudbind.core import exceptions


UPSERT = 'upsert'
DELETE = 'delete'


class Mutation(collections.namedtuple('Mutation', ['operation', 'payload'])):
  """One queued change: an upserted Entity or a deleted Key."""

  def ToJson(self):
    return {self.operation: self.payload.ToJson()}


def _Flatten(items):
  flat = []
  for item in items:
    if isinstance(item, (list, tuple)):
      flat.extend(item)
    else:
      flat.append(item)
  return flat


class Commit(object):
  """Queues saves and deletes to be sent to Datastore as one request.

  A Commit is handed to the caller by Dataset.Commit() and must only be used
  inside that block. It is plain bookkeeping: nothing is sent until the block
  exits, and it is not safe to queue mutations from several threads at once.

    with dataset.Commit() as c:
      c.Save(task1, task2)
      c.Delete(old_task.key)

  When drained, every queued upsert comes before every queued delete, each
  group in the order it was queued.
  """

  def __init__(self):
    self._upserts = []
    self._deletes = []
    self._drained = False

  def Close(self):
    """Closes the commit without draining it. Nothing more can be queued."""
    self._drained = True

  def _CheckOpen(self):
    if self._drained:
      raise exceptions.CallerContractError(
          'This commit is closed and cannot be changed.')

  def Save(self, *entities):
    """Queues entities to be inserted or updated.

    Args:
      *entities: entity.Entity, The entities to save. A list or tuple argument
        is expanded.

    Returns:
      [entity.Entity], The queued entities.
    """
    self._CheckOpen()
    entities = _Flatten(entities)
    for entity in entities:
      if getattr(entity, 'key', None) is None:
        raise exceptions.CallerContractError(
            'Cannot save an entity without a key: [{0!r}]'.format(entity))
    self._upserts.extend(entities)
    return entities

  def Delete(self, *entities_or_keys):
    """Queues entities or keys to be deleted.

    Args:
      *entities_or_keys: entity.Entity | key.Key, What to delete. The key of
        anything that has one is used, other items are taken as keys. A list
        or tuple argument is expanded.

    Returns:
      bool, True.
    """
    self._CheckOpen()
    keys = [item.key if hasattr(item, 'key') else item
            for item in _Flatten(entities_or_keys)]
    if any(key is None for key in keys):
      raise exceptions.CallerContractError(
          'Cannot delete an entity without a key.')
    self._deletes.extend(keys)
    return True

  def Mutations(self):
    """Drains the queued changes.

    May only be called once per Commit; the owning Dataset does so when the
    commit block exits.

    Raises:
      CallerContractError: If the commit was already drained.

    Returns:
      [Mutation], The upserts followed by the deletes.
    """
    self._CheckOpen()
    self._drained = True
    mutations = [Mutation(UPSERT, entity) for entity in self._upserts]
    mutations.extend(Mutation(DELETE, key) for key in self._deletes)
    return mutations

  def Entities(self):
    """Returns the entities queued for saving."""
    return list(self._upserts)

  def Keys(self):
    """Returns the keys queued for deletion."""
    return list(self._deletes)

  @property
  def drained(self):
    return self._drained

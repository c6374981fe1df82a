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

"""Datastore keys."""


class Key(object):
  """Identifies an entity by kind and id or name, under optional parents.

  A key with neither an id nor a name is incomplete; the backend allocates an
  id for it when the entity is saved.

  Attributes:
    kind: str, The kind of the entity.
    id: int, The numeric id, or None.
    name: str, The string name, or None.
    parent: Key, The parent key, or None.
    project: str, The project of the key. None means the dataset's project.
    namespace: str, The namespace of the key, or None.
  """

  def __init__(self, kind=None, id_or_name=None, parent=None, project=None,
               namespace=None):
    self.kind = kind
    self.id = None
    self.name = None
    if isinstance(id_or_name, int) and not isinstance(id_or_name, bool):
      self.id = id_or_name
    elif id_or_name is not None:
      self.name = str(id_or_name)
    self.parent = parent
    self.project = project
    self.namespace = namespace

  @property
  def id_or_name(self):
    return self.id if self.id is not None else self.name

  def IsComplete(self):
    return self.id_or_name is not None

  @property
  def path(self):
    """[(kind, id_or_name)], The path from the root ancestor to this key."""
    path = self.parent.path if self.parent is not None else []
    return path + [(self.kind, self.id_or_name)]

  def ToJson(self):
    """Returns the Datastore v1 REST representation of this key."""
    elements = []
    for kind, id_or_name in self.path:
      element = {'kind': kind}
      if isinstance(id_or_name, int):
        # int64 values are sent as strings.
        element['id'] = str(id_or_name)
      elif id_or_name is not None:
        element['name'] = id_or_name
      elements.append(element)
    result = {'path': elements}
    partition = {}
    if self.project is not None:
      partition['projectId'] = self.project
    if self.namespace is not None:
      partition['namespaceId'] = self.namespace
    if partition:
      result['partitionId'] = partition
    return result

  @classmethod
  def FromJson(cls, data):
    """Builds a key from its Datastore v1 REST representation."""
    partition = data.get('partitionId', {})
    key = None
    for element in data.get('path', []):
      if 'id' in element:
        id_or_name = int(element['id'])
      else:
        id_or_name = element.get('name')
      key = cls(element.get('kind'), id_or_name, parent=key,
                project=partition.get('projectId'),
                namespace=partition.get('namespaceId'))
    return key

  def __eq__(self, other):
    return (isinstance(other, Key) and
            self.path == other.path and
            self.project == other.project and
            self.namespace == other.namespace)

  def __ne__(self, other):
    return not self.__eq__(other)

  def __hash__(self):
    return hash((tuple(self.path), self.project, self.namespace))

  def __repr__(self):
    return 'Key({0!r}, {1!r})'.format(self.kind, self.id_or_name)

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

"""Datastore entities and the encoding of their property values."""

import base64
import datetime

from cloudbind.datastore import key as key_lib


def EncodeValue(value, exclude_from_indexes=False):
  """Encodes a Python value as a Datastore v1 REST Value.

  Args:
    value: The value to encode.
    exclude_from_indexes: bool, True to exclude the value from indexes.

  Raises:
    TypeError: If the value has no Datastore representation.

  Returns:
    dict, The encoded Value.
  """
  if value is None:
    encoded = {'nullValue': None}
  elif isinstance(value, bool):
    encoded = {'booleanValue': value}
  elif isinstance(value, int):
    encoded = {'integerValue': str(value)}
  elif isinstance(value, float):
    encoded = {'doubleValue': value}
  elif isinstance(value, str):
    encoded = {'stringValue': value}
  elif isinstance(value, bytes):
    encoded = {'blobValue': base64.b64encode(value).decode('ascii')}
  elif isinstance(value, datetime.datetime):
    if value.tzinfo is not None:
      value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    encoded = {'timestampValue': value.strftime('%Y-%m-%dT%H:%M:%S.%fZ')}
  elif isinstance(value, key_lib.Key):
    encoded = {'keyValue': value.ToJson()}
  elif isinstance(value, Entity):
    encoded = {'entityValue': value.ToJson()}
  elif isinstance(value, dict):
    encoded = {'entityValue': {'properties': dict(
        (name, EncodeValue(v)) for name, v in value.items())}}
  elif isinstance(value, (list, tuple)):
    # Arrays carry the index setting on their elements instead.
    return {'arrayValue': {'values': [
        EncodeValue(v, exclude_from_indexes) for v in value]}}
  else:
    raise TypeError('Cannot store a value of type [{0}] in Datastore.'.format(
        type(value).__name__))
  if exclude_from_indexes:
    encoded['excludeFromIndexes'] = True
  return encoded


class Entity(object):
  """A Datastore entity: a key plus named property values.

  Properties are read and written like dict items:

    task = Entity(Key('Task', 'sampleTask'))
    task['description'] = 'Buy milk'

  Attributes:
    key: key.Key, The key of the entity, or None.
    exclude_from_indexes: set(str), Properties not to index.
  """

  def __init__(self, key=None, exclude_from_indexes=None, **props):
    self.key = key
    self.exclude_from_indexes = set(exclude_from_indexes or [])
    self._properties = dict(props)

  def __getitem__(self, name):
    return self._properties[name]

  def __setitem__(self, name, value):
    self._properties[name] = value

  def __delitem__(self, name):
    del self._properties[name]

  def __contains__(self, name):
    return name in self._properties

  def get(self, name, default=None):
    return self._properties.get(name, default)

  def properties(self):
    return dict(self._properties)

  def ToJson(self):
    """Returns the Datastore v1 REST representation of this entity."""
    result = {'properties': dict(
        (name, EncodeValue(value, name in self.exclude_from_indexes))
        for name, value in self._properties.items())}
    if self.key is not None:
      result['key'] = self.key.ToJson()
    return result

  def __eq__(self, other):
    return (isinstance(other, Entity) and self.key == other.key and
            self._properties == other._properties)

  def __ne__(self, other):
    return not self.__eq__(other)

  __hash__ = None

  def __repr__(self):
    return 'Entity({0!r}, {1!r})'.format(self.key, self._properties)

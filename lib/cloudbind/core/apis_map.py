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

"""The map of the services cloudbind can build clients for."""


class APIDef(object):
  """Struct for info required to build the client of a service.

  Attributes:
    service_classpath: str, Relative path to the transport Service class.
    facade_classpath: str, Relative path to the facade class returned to
      callers.
    section: str, The properties section holding the service's settings.
    default_scopes: [str], The OAuth scopes requested when none are given.
  """

  def __init__(self,
               service_classpath,
               facade_classpath,
               section,
               default_scopes=None):
    self.service_classpath = service_classpath
    self.facade_classpath = facade_classpath
    self.section = section
    self.default_scopes = default_scopes or []

  def __eq__(self, other):
    return (isinstance(other, self.__class__)
            and self.__dict__ == other.__dict__)

  def __ne__(self, other):
    return not self.__eq__(other)


MAP = {
    'bigquery': APIDef(
        'bigquery.service.Service',
        'bigquery.project.Project',
        'bigquery',
        ['https://www.googleapis.com/auth/bigquery']),
    'datastore': APIDef(
        'datastore.service.Service',
        'datastore.dataset.Dataset',
        'datastore',
        ['https://www.googleapis.com/auth/datastore']),
    'translate': APIDef(
        'translate.service.Service',
        'translate.api.Api',
        'translate',
        ['https://www.googleapis.com/auth/cloud-platform']),
}

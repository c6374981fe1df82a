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

"""Read and resolve properties for the cloudbind libraries.

Properties are the knobs that configure how clients find their project and
credentials. Each property may be backed by one or more environment variables
and by callbacks (for example a metadata server lookup) that are consulted
only when no variable is set.

Environment variables are read through VALUES.environment rather than
os.environ directly, so tests and embedding applications can substitute their
own mapping with OverrideEnvironment().
"""

import contextlib
import functools
import os
import re

from cloudbind.core import exceptions


_VALID_PROJECT_REGEX = re.compile(
    r'^'
    # An optional domain-like component, ending with a colon, e.g.,
    # google.com:
    r'(?:(?:[-a-z0-9]{1,63}\.)*(?:[a-z](?:[-a-z0-9]{0,61}[a-z0-9])?):)?'
    # Followed by a required identifier-like component, for example:
    #   waffle-house    match
    #   -foozle        no match
    #   Foozle         no match
    r'(?:(?:[a-z](?:[-a-z0-9]{0,61}[a-z0-9])?))'
    r'$'
)


_VALID_ENDPOINT_OVERRIDE_REGEX = re.compile(
    r'^'
    # require http or https for scheme
    r'(?:https?)://'
    # netlocation portion of address. can be any of
    # - domain name
    # - 'localhost'
    # - ipv4 addr
    r'(?:'  # begin netlocation
    r'(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+'
    r'(?:[A-Z]{2,6}|[A-Z0-9-]{2,})|'
    r'localhost|'
    r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}'
    r')'  # end netlocation
    # optional port
    r'(?::\d+)?'
    # optional path
    r'(?:/\S*)?'
    r'$', re.IGNORECASE)


VERBOSITY_CHOICES = ('debug', 'info', 'warning', 'error', 'critical', 'none')


def Stringize(value):
  if isinstance(value, str):
    return value
  return str(value)


def _LooksLikeAProjectName(project):
  """Heuristics testing if a string looks like a project name, but an id."""

  if re.match(r'[-0-9A-Z]', project[0]):
    return True

  return any(c in project for c in ' !"\'')


class Error(exceptions.ConfigurationError):
  """Exceptions for the properties module."""


class NoSuchPropertyError(Error):
  """An exception to be raised when the desired property does not exist."""


class InvalidValueError(Error):
  """An exception to be raised when the set value of a property is invalid."""


class InvalidProjectError(InvalidValueError):
  """An exception for bad project ids."""


def ProjectValidator(project):
  """Checks to see if the project string is a valid project id."""
  if project is None:
    return
  if not isinstance(project, str):
    raise InvalidValueError('project must be a string')
  if _VALID_PROJECT_REGEX.match(project):
    return

  if project == '':  # pylint: disable=g-explicit-bool-comparison
    raise InvalidProjectError('The project property is set to the '
                              'empty string, which is invalid.')
  if project.isdigit():
    raise InvalidProjectError(
        'The project property must be set to a valid project ID, not the '
        'project number [{value}]'.format(value=project))
  if _LooksLikeAProjectName(project):
    raise InvalidProjectError(
        'The project property must be set to a valid project ID, not the '
        'project name [{value}]'.format(value=project))
  raise InvalidProjectError(
      'The project property must be set to a valid project ID, '
      '[{value}] is not a valid project ID.'.format(value=project))


def _ChoiceValidator(property_name, choices, value):
  if value is None:
    return
  if Stringize(value).lower() not in choices:
    raise InvalidValueError(
        'The [{0}] value [{1}] is not valid. Possible values: [{2}].'.format(
            property_name, value, ', '.join(choices)))


def _EndpointValidator(value):
  """Checks to see if the endpoint override string is valid."""
  if value is None:
    return
  if not _VALID_ENDPOINT_OVERRIDE_REGEX.match(value):
    raise InvalidValueError(
        'The endpoint_overrides property must be an absolute URI beginning '
        'with http:// or https://, [{value}] is not a valid URI.'.format(
            value=value))


def _GetGCEProject():
  # pylint: disable=g-import-not-at-top, the metadata lookup depends on
  # properties itself.
  from cloudbind.core.credentials import gce_cache
  return gce_cache.GetProjectId()


class Environment(object):
  """Provides environment variable values to properties.

  Absent and empty variables are both reported as None, so an exported but
  blank variable never shadows a later source.
  """

  def __init__(self, values=None):
    self._values = os.environ if values is None else values

  def Get(self, name):
    value = self._values.get(name)
    if not value:
      return None
    return value


class _Sections(object):
  """Represents the available sections of properties.

  Attributes:
    environment: Environment, The provider environment variables are read
      from.
    core: _SectionCore, Settings shared by every service.
    translate: _SectionTranslate, Settings for the Translate service.
    bigquery: _SectionService, Settings for the BigQuery service.
    datastore: _SectionService, Settings for the Datastore service.
    api_endpoint_overrides: _SectionApiEndpointOverrides, Endpoint overrides
      for each service.
  """

  def __init__(self):
    self.environment = Environment()
    self.core = _SectionCore()
    self.translate = _SectionTranslate()
    self.bigquery = _SectionService('bigquery')
    self.datastore = _SectionService('datastore')
    self.api_endpoint_overrides = _SectionApiEndpointOverrides()

    self.__sections = dict((section.name, section) for section in [
        self.core, self.translate, self.bigquery, self.datastore,
        self.api_endpoint_overrides])

  def __iter__(self):
    return iter(self.__sections.values())

  def Section(self, section):
    """Gets a section given its name.

    Args:
      section: str, The section for the desired property.

    Returns:
      Section, The section corresponding to the given name.

    Raises:
      NoSuchPropertyError: If the section is not known.
    """
    try:
      return self.__sections[section]
    except KeyError:
      raise NoSuchPropertyError('Section "{section}" does not exist.'.format(
          section=section))


class _Section(object):
  """Represents a section of properties that are related.

  Attributes:
    name: str, The name of the section.
  """

  def __init__(self, name):
    self.__name = name
    self.__properties = {}

  @property
  def name(self):
    return self.__name

  def __iter__(self):
    return iter(self.__properties.values())

  def _Add(self, name, env_vars=None, help_text=None, callbacks=None,
           default=None, validator=None):
    prop = _Property(
        section=self.__name, name=name, env_vars=env_vars, help_text=help_text,
        callbacks=callbacks, default=default, validator=validator)
    self.__properties[name] = prop
    return prop

  def Property(self, property_name):
    """Gets a property from this section, given its name.

    Args:
      property_name: str, The name of the desired property.

    Returns:
      Property, The property corresponding to the given name.

    Raises:
      NoSuchPropertyError: If the property is not known for this section.
    """
    try:
      return self.__properties[property_name]
    except KeyError:
      raise NoSuchPropertyError(
          'Section [{s}] has no property [{p}].'.format(
              s=self.__name,
              p=property_name))

  def HasProperty(self, property_name):
    return property_name in self.__properties


class _SectionCore(_Section):
  """Contains the properties shared by all services."""

  def __init__(self):
    super(_SectionCore, self).__init__('core')
    self.project = self._Add(
        'project',
        env_vars=['GOOGLE_CLOUD_PROJECT', 'GCLOUD_PROJECT'],
        help_text='The project id of the Cloud Platform project to operate on '
        'when a service specific project is not set.',
        callbacks=[_GetGCEProject],
        validator=ProjectValidator)
    self.keyfile = self._Add(
        'keyfile',
        env_vars=['GOOGLE_CLOUD_KEYFILE', 'GCLOUD_KEYFILE'],
        help_text='Path to a JSON keyfile used when no service specific '
        'keyfile is set.')
    self.keyfile_json = self._Add(
        'keyfile_json',
        env_vars=['GOOGLE_CLOUD_KEYFILE_JSON', 'GCLOUD_KEYFILE_JSON'],
        help_text='Contents of a JSON keyfile used when no keyfile path is '
        'set.')
    self.verbosity = self._Add(
        'verbosity',
        env_vars=['CLOUDBIND_VERBOSITY'],
        help_text='Default logging verbosity. Possible values: [{0}].'.format(
            ', '.join(VERBOSITY_CHOICES)),
        validator=functools.partial(
            _ChoiceValidator, 'verbosity', VERBOSITY_CHOICES))


class _SectionService(_Section):
  """Contains the project and keyfile properties of one service.

  Each property falls back to its counterpart in the core section.
  """

  def __init__(self, name):
    super(_SectionService, self).__init__(name)
    prefix = name.upper()
    # pylint: disable=unnecessary-lambda, VALUES does not exist yet.
    self.project = self._Add(
        'project',
        env_vars=[prefix + '_PROJECT'],
        help_text='The project id to use for {0}.'.format(name),
        callbacks=[lambda: VALUES.core.project.Get()],
        validator=ProjectValidator)
    self.keyfile = self._Add(
        'keyfile',
        env_vars=[prefix + '_KEYFILE'],
        help_text='Path to a JSON keyfile to use for {0}.'.format(name),
        callbacks=[lambda: VALUES.core.keyfile.Get()])
    self.keyfile_json = self._Add(
        'keyfile_json',
        env_vars=[prefix + '_KEYFILE_JSON'],
        help_text='Contents of a JSON keyfile to use for {0}.'.format(name),
        callbacks=[lambda: VALUES.core.keyfile_json.Get()])


class _SectionTranslate(_SectionService):
  """Contains the properties for the 'translate' section."""

  def __init__(self):
    super(_SectionTranslate, self).__init__('translate')
    self.key = self._Add(
        'key',
        env_vars=['TRANSLATE_KEY', 'GOOGLE_CLOUD_KEY'],
        help_text='API key used instead of project credentials.')


class _SectionApiEndpointOverrides(_Section):
  """Contains the properties for the 'api_endpoint_overrides' section."""

  def __init__(self):
    super(_SectionApiEndpointOverrides, self).__init__(
        'api_endpoint_overrides')
    self.translate = self._Add('translate', validator=_EndpointValidator)
    self.bigquery = self._Add('bigquery', validator=_EndpointValidator)
    self.datastore = self._Add('datastore', validator=_EndpointValidator)


class _Property(object):
  """An individual property that can be read from the environment.

  Attributes:
    section: str, The name of the section the property appears in.
    name: str, The name of the property.
    help_text: str, What this property does.
    env_vars: [str], Conventional environment variables for this property,
      checked in order after the cloudbind specific variable.
    callbacks: [func], A list of functions to be called, in order, if no value
      is found elsewhere.
    default: str, A final value to use if no value is found after the
      callbacks.
    validator: func(str), A function that is called on the value when .Set()'d
      or .Get()'d. For valid values, the function should do nothing. For
      invalid values, it should raise InvalidValueError with an explanation of
      why it was invalid.
  """

  def __init__(self, section, name, env_vars=None, help_text=None,
               callbacks=None, default=None, validator=None):
    self.__section = section
    self.__name = name
    self.__env_vars = env_vars or []
    self.__help_text = help_text
    self.__callbacks = callbacks or []
    self.__default = default
    self.__validator = validator
    self.__value = None

  @property
  def section(self):
    return self.__section

  @property
  def name(self):
    return self.__name

  @property
  def help_text(self):
    return self.__help_text

  @property
  def default(self):
    return self.__default

  @property
  def callbacks(self):
    return self.__callbacks

  def Get(self, validate=True):
    """Gets the value for this property.

    Looks first at a value set in this process, then in the environment, and
    finally at callbacks and the default.

    Args:
      validate: bool, Whether or not to run the fetched value through the
          validation function.

    Returns:
      str, The value for this property, or None if it is not set.
    """
    value = _GetProperty(self)
    if validate:
      self.Validate(value)
    return value

  def Validate(self, value):
    """Test to see if the value is valid for this property.

    Args:
      value: str, The value of the property to be validated.

    Raises:
      InvalidValueError: If the value was invalid according to the property's
          validator.
    """
    if self.__validator:
      self.__validator(value)

  def Set(self, value):
    """Sets the value for this property for the rest of this process.

    Args:
      value: str, The proposed value for this property. If None, the override
        is removed and the environment is consulted again.
    """
    self.Validate(value)
    if value is not None:
      value = Stringize(value)
    self.__value = value

  def GetSetValue(self):
    return self.__value

  def EnvironmentName(self):
    """Get the name of the cloudbind environment variable for this property.

    Returns:
      str, The name of the correct environment variable.
    """
    return 'CLOUDBIND_{section}_{name}'.format(
        section=self.__section.upper(),
        name=self.__name.upper(),
    )

  def EnvironmentNames(self):
    """Returns every environment variable checked, in lookup order."""
    names = [self.EnvironmentName()]
    names.extend(n for n in self.__env_vars if n not in names)
    return names

  def __str__(self):
    return '{section}/{name}'.format(section=self.__section, name=self.__name)


VALUES = _Sections()


@contextlib.contextmanager
def OverrideEnvironment(values):
  """Reads environment variables from the given mapping within the context.

  Args:
    values: {str: str}, The variables that are set. Anything missing is unset.

  Yields:
    Environment, The environment in effect.
  """
  previous = VALUES.environment
  VALUES.environment = Environment(values)
  try:
    yield VALUES.environment
  finally:
    VALUES.environment = previous


def _GetProperty(prop):
  """Gets the given property.

  Args:
    prop: properties._Property, The property to get.

  Returns:
    str, The value of the property, or None if it is not set.
  """
  value = _GetPropertyWithoutDefault(prop)
  if value is not None:
    return Stringize(value)

  # Still nothing, check the final default.
  if prop.default is not None:
    return Stringize(prop.default)

  return None


def _GetPropertyWithoutDefault(prop):
  """Gets the given property without using a default.

  Args:
    prop: properties._Property, The property to get.

  Returns:
    str, The value of the property, or None if it is not set.
  """
  value = _GetPropertyWithoutCallback(prop)
  if value is not None:
    return Stringize(value)

  # No value, try getting a value from the callbacks.
  for callback in prop.callbacks:
    value = callback()
    if value:
      return Stringize(value)

  return None


def _GetPropertyWithoutCallback(prop):
  """Gets the given property from an explicit setting or the environment.

  Args:
    prop: properties._Property, The property to get.

  Returns:
    str, The value of the property, or None if it is not set.
  """
  value = prop.GetSetValue()
  if value is not None:
    return value

  # Check the environment variable overrides, most specific first.
  for env_name in prop.EnvironmentNames():
    value = VALUES.environment.Get(env_name)
    if value is not None:
      return value

  return None

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

"""The Translate facade returned by cloudbind.translate.New."""

import collections

from cloudbind.core import exceptions
from cloudbind.core import properties


class Error(exceptions.Error):
  """Errors for this module."""


class ResponseMismatchError(Error):
  """The API returned a different number of results than inputs sent."""

  def __init__(self, kind, expected, actual):
    super(ResponseMismatchError, self).__init__(
        'Sent {0} strings but received {1} {2}.'.format(
            expected, actual, kind))


Translation = collections.namedtuple(
    'Translation', ['text', 'to', 'origin', 'from_', 'model', 'detected'])

Detection = collections.namedtuple('Detection', ['text', 'results'])

DetectionResult = collections.namedtuple(
    'DetectionResult', ['language', 'confidence'])

Language = collections.namedtuple('Language', ['code', 'name'])


def _CheckCount(kind, items, text):
  if len(items) != len(text):
    raise ResponseMismatchError(kind, len(text), len(items))
  return items


def _Unwrap(results, text):
  """Returns a single result for a single input, else the list."""
  if len(text) == 1:
    return results[0]
  return results


class Api(object):
  """Translates text and detects languages with the Translation API.

  Attributes:
    service: translate.service.Service, The transport of this object.
  """

  def __init__(self, service):
    self.service = service

  @property
  def project(self):
    return self.service.project

  @staticmethod
  def DefaultProject():
    return properties.VALUES.translate.project.Get()

  def Translate(self, *text, to=None, from_=None, format=None, model=None,
                cid=None):
    """Translates text into the target language.

    Args:
      *text: str, The strings to translate.
      to: str, The target language code. Required.
      from_: str, The source language code. Detected when None.
      format: str, 'text' or 'html'.
      model: str, 'base' or 'nmt'.
      cid: str, The customization id.

    Raises:
      ValueError: If no text or no target language is given.
      ResponseMismatchError: If the API returns a result count that does not
        match the input.

    Returns:
      Translation for a single string, else a list of Translation.
    """
    # pylint: disable=redefined-builtin, format is the API's parameter name.
    if not text:
      raise ValueError('text is required')
    if not to:
      raise ValueError('to is required')
    response = self.service.Translate(text, to, from_=from_, format=format,
                                      model=model, cid=cid)
    translations = _CheckCount(
        'translations', response.get('data', {}).get('translations', []), text)
    results = []
    for origin, translation in zip(text, translations):
      detected = translation.get('detectedSourceLanguage')
      results.append(Translation(
          text=translation.get('translatedText'), to=to, origin=origin,
          from_=detected or from_, model=translation.get('model'),
          detected=detected is not None))
    return _Unwrap(results, text)

  def Detect(self, *text):
    """Detects the language of text.

    Returns:
      Detection for a single string, else a list of Detection.
    """
    if not text:
      raise ValueError('text is required')
    response = self.service.Detect(text)
    detections = _CheckCount(
        'detections', response.get('data', {}).get('detections', []), text)
    results = []
    for origin, candidates in zip(text, detections):
      results.append(Detection(origin, [
          DetectionResult(c.get('language'), c.get('confidence'))
          for c in candidates]))
    return _Unwrap(results, text)

  def Languages(self, language=None):
    """Lists the supported languages, named in language if given."""
    response = self.service.Languages(language=language)
    return [Language(lang.get('language'), lang.get('name'))
            for lang in response.get('data', {}).get('languages', [])]

  def __repr__(self):
    return 'Api(project={0!r})'.format(self.project)

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

"""Config constants for the cloudbind libraries."""

import cloudbind


CLOUDBIND_VERSION = cloudbind.__version__

# Product token sent in the User-Agent header of every API request.
CLOUDBIND_PRODUCT_NAME = 'cloudbind'

# Environment variable that overrides the host of the metadata server. This is
# the same variable google-auth honors.
GCE_METADATA_HOST_ENV = 'GCE_METADATA_HOST'
GCE_METADATA_DEFAULT_HOST = 'metadata.google.internal'

# Seconds to wait for the metadata server. It answers locally or not at all.
GCE_METADATA_TIMEOUT = 1

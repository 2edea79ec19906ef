# Copyright 2025 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

import pytest
import structlog


@pytest.fixture(autouse=True)
def clean_structlog():
    yield
    structlog.reset_defaults()

"""Shared fixtures for core unit tests"""

import pytest

from mdsite.core.markdown import default_renderer


@pytest.fixture(name="render")
def render_fixture():
    return default_renderer("gfm-like")

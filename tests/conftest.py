"""Shared test fixtures for the inkwell test suite."""

import pytest
import structlog

from inkwell.config import InkwellConfig
from inkwell.runtime import Runtime, build_runtime


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI tests configure structlog globally; undo it after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def runtime() -> Runtime:
    """Runtime with default configuration, independent of any inkwell.toml."""
    return build_runtime(config=InkwellConfig())


@pytest.fixture
def post_text() -> str:
    return """---
title: Building AI-native apps
tags:
  - ai
  - product
---
# Building AI-native apps

Intent beats **rigid flows** every time.

## Why now

- Models got cheaper
- Latency dropped

```python
# not a heading
print("hi")
```

### Next steps

1. Prototype
2. Ship
"""

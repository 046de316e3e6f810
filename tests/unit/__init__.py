"""
Unit tests for the retry layer.

Test individual components in isolation:
- Backoff strategies (delay laws, ceilings, validation)
- Operation shapes and failure classification
- Stop conditions and exhaustion errors
- Retry engine (attempt loop, with a mocked sleep)
- Settings, logging and metrics
"""

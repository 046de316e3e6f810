"""
Integration tests for the retry layer.

Run the engine against the real asyncio clock (marked with @pytest.mark.integration):
- Elapsed durations under constant and linear backoff
- In-flight tasks and coroutines (single attempt)
- Concurrent retry invocations sharing one backoff
"""

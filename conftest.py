"""Global pytest configuration."""

import os

# Settings are cached on first use; pin test values before any imports
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ["COMPLETION_RETRY_COUNT"] = "0"

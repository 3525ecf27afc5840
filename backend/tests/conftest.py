"""Root conftest - shared test configuration."""

import os

# Tests never reach real providers or a real database
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test-fake-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("AUTH_PROVIDER_URL", "http://auth.test")
os.environ.setdefault("AUTH_PROVIDER_ANON_KEY", "anon-test-key")
os.environ["USE_AI_SUMMARY"] = "false"
os.environ.setdefault("LOG_FORMAT", "text")

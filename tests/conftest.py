"""Root conftest — shared test configuration."""

import os

import email_validator

# Ensure tests never reach real integrations or databases
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("DOMANI_DATABASE_URL", "sqlite+aiosqlite:///test_domani.db")
os.environ.setdefault("TOKEN_SECRET", "test-token-secret")
os.environ.setdefault("LEAD_NOTIFY_DISCORD_WEBHOOK", "https://discord.test/webhook")

# Fixture addresses use the reserved .test TLD
email_validator.TEST_ENVIRONMENT = True

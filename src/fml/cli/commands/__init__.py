"""Top-level fml commands (auto-discovered)."""

"""Message threads module: one conversation per (owner, contact)."""

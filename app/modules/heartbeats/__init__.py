"""Heartbeats module: tracks when an owner's phone was last active."""

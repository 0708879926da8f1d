"""Messages module: SMS messages sent and received by an owner's phone."""

"""Document models, input sanitising and payload parsing."""

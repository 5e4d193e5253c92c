"""Chat app package: buyer and owner conversations, messages and attachments."""

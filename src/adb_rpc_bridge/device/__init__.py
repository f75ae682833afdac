"""Device-communication client and property parsing."""

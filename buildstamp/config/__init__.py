"""Configuration for buildstamp."""

"""Utility modules for buildstamp.

- error_handling: CLI error handling decorator
- logging: Logger setup and verbosity levels
- output: Shared rich console and JSON output
"""

"""
buildstamp - CI detection and build version stamping
"""

__version__ = "0.3.0"

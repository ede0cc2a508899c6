"""
rtsetup package.

One-shot Linux host setup for running the toolkit as a regular user:
- udev rules for root-less access to research hardware
- realtime priority and memory locking limits for the toolkit group
- creation of the toolkit group itself

Every privileged change goes through sudo and needs operator consent.
"""

__version__ = "0.1.0"

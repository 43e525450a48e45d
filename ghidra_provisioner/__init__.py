"""
Ghidra headless provisioner.

Installs Ghidra (and optionally ThingFinder) on a Linux host and wires
up the ``ghidra-headless`` command.
"""

__version__ = "0.1.0"

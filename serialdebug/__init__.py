"""Levelled, timestamped debug output, packet framing and command dispatch over a serial link."""

__version__ = "0.1.0"
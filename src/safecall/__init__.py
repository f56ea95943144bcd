"""
SafeCall - Personal Safety Companion Engine

This package provides the live call session engine for the SafeCall
companion: a simulated conversation with an AI companion that covertly
watches for a secret code word or distress language and silently
alerts emergency contacts.

IMPORTANT: This is a safety-critical component.
The cover conversation must never reveal that an alert fired.
"""

__version__ = "0.1.0"
__author__ = "SafeCall Engineering Team"

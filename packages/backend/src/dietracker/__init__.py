"""Simple Diet Tracker — personal calorie tracking backend.

Users sign in through an external identity service, get a calorie
account with a daily limit, and record, list, and delete their daily
intake entries.
"""

__version__ = "0.1.0"

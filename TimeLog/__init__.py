"""
TimeLog package.

Records developer activity into per-day JSON logs and turns a day's log into
a categorised timesheet with Gemini.
"""
import logging

# Applications using this package configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

VERSION = "0.2.0"

"""LazyMan channel core.

Browsable NHL/MLB broadcast catalog: league -> date -> game -> feed -> quality.
"""

__version__ = "0.5.0"

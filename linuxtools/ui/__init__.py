"""
Terminal presentation for linux-tools.

Modules:
  backend.py  — whiptail / dialog / plain-text adapter: menu, checklist,
                confirm, gauge.
  header.py   — startup banner.
  progress.py — text-mode step gauge for the recommended-order run.
  theme.py    — colours, theme styles, icons.
"""

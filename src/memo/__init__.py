"""memo: tagged local notes with a small query language.

Layout:
    ~/.memo/
    ├── memo/
    │   ├── 2026_2_18_9_30_0.txt       # first line: title with [tags]
    │   └── 2026_2_18_21_4_12.html
    └── index.html                      # last rendered search result

Searches combine keys with ``+`` (union), ``-`` (difference) and ``*``
(intersection), evaluated left to right.
"""

__version__ = "0.1.0"

"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Allow ``python -m mavencache``.
"""

from .cli import main

raise SystemExit(main())

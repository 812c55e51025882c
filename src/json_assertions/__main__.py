"""Allow ``python -m json_assertions``."""

from __future__ import annotations

from .cli import main

raise SystemExit(main())

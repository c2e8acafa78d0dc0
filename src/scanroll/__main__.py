"""Allow ``python -m scanroll``."""

from __future__ import annotations

from scanroll.cli.main import main

raise SystemExit(main())

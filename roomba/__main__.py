from __future__ import annotations

from roomba.cli import main

raise SystemExit(main())

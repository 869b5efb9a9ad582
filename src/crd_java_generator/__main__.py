"""Allow ``python -m crd_java_generator``."""

from __future__ import annotations

from .cli import main

raise SystemExit(main())

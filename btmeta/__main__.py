#!/usr/bin/env python3
"""Entry point for ``python -m btmeta``."""

from __future__ import annotations

from btmeta.cli.main import main

if __name__ == "__main__":
    main()

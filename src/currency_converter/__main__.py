from __future__ import annotations

from currency_converter.cli import run

if __name__ == "__main__":
    run()

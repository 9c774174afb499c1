# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""CLI entry point for genro-records (grecords command).

Usage:
    grecords --help
    grecords find orders 12
    grecords find-by orders -w status=paid -o created=desc
"""

from .cli import cli


def main() -> None:
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()

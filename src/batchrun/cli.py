from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .config import load_config
from .errors import BatchHaltError
from .runner.session import Session


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run commands typed at the prompt, or whole scripts in SERIAL or PARALLEL mode."
    )
    parser.add_argument(
        "--dotenv",
        type=Path,
        default=None,
        help="Optional path to a .env file with BATCHRUN_* settings.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    console = Console()

    try:
        config = load_config(args.dotenv)
    except RuntimeError as exc:
        console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        return 2

    session = Session(config=config, console=console)
    try:
        session.run()
    except BatchHaltError:
        console.print("[red]Run halted.[/red]")
        return 1
    except KeyboardInterrupt:
        console.print()
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

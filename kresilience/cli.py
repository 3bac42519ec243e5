"""Command that checkpoints a small two-dimensional array with the file backend."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .checkpoint import checkpoint
from .factory import make_context


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Checkpoint a small array to files.")
    parser.add_argument(
        "--config", default="config_file.json", help="configuration file (JSON)"
    )
    args = parser.parse_args(argv)

    ctx = make_context(args.config)
    if ctx is None:
        print("error: unknown checkpoint backend in configuration", file=sys.stderr)
        return 1

    dim0, dim1 = 5, 5
    view = [[0.0] * dim1 for _ in range(dim0)]

    def region() -> None:
        for row in view:
            row[:] = [3.0] * dim1

    checkpoint(ctx, "test_checkpoint", 0, region)
    return 0


if __name__ == "__main__":
    sys.exit(main())
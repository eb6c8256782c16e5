"""meshdecode - Decode STL and OFF/COFF files into render-ready triangle meshes."""

import sys
from typing import Optional

from meshdecode.cli.app import app


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the meshdecode CLI."""
    try:
        app(argv)
        return 0
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Allow ``python -m mcp_mermaid``."""

import sys

from mcp_mermaid.cli import main

if __name__ == "__main__":
    sys.exit(main())

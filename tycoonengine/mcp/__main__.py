"""python -m tycoonengine.mcp [-v] <game_module>, same as ``tycoonengine mcp``."""

import sys

from tycoonengine.cli import main

if __name__ == "__main__":
    flags = [a for a in sys.argv[1:] if a.startswith("-")]
    rest = [a for a in sys.argv[1:] if not a.startswith("-")]
    main([*flags, "mcp", *rest])

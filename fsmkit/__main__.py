import sys

from fsmkit.cli import main

sys.exit(main())

"""Allow ``python -m typedmessages``."""

import sys

from typedmessages.cli import main

sys.exit(main())

"""Allow ``python -m numerus``."""

import sys

from numerus.cli import main

sys.exit(main())

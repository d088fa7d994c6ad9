"""Allow running as python -m disktrend."""

import sys

from disktrend.cli import main

sys.exit(main())
